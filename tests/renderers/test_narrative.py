"""Tests for the narrative briefing renderer."""

from __future__ import annotations

from sitebrief.renderers import NarrativeOptions, NarrativeRenderer
from tests._fixtures.graph_builder import GraphBuilder


def test_narrative_sections_appear_in_fixed_order(storefront) -> None:
    output = NarrativeRenderer().render(storefront)

    assert output.startswith("# Website Context Map: Test Store\n\nBase URL: https://shop.test\nVersion: 1.0.0\n")
    headings = [
        "## Pages Structure",
        "## Global Components",
        "## Navigation Flow",
        "## Authentication",
        "## Common User Flows",
    ]
    positions = [output.index(heading) for heading in headings]
    assert positions == sorted(positions)


def test_narrative_page_details(storefront) -> None:
    output = NarrativeRenderer().render(storefront)

    assert "### Home (/)\n- **Description**: Landing page with featured products\n- **Requires Auth**: No\n" in output
    assert "  - Login button (button)\n    - Selector: `#login-btn`\n" in output
    assert "  - Hero banner (text)\n- **Navigation Options**: login, products\n" in output
    assert "- **Products Available**: 3 items\n  - Categories: Electronics, Furniture\n" in output
    assert "### Shopping Cart (/cart)\n- **Description**: Items selected for purchase\n- **Requires Auth**: Yes\n" in output


def test_narrative_navigation_flow_groups_by_source(storefront) -> None:
    output = NarrativeRenderer().render(storefront)

    assert (
        "**From Home**:\n"
        "- Navigate to login page\n"
        "  - Route: /login\n"
        "- Browse products\n"
        "  - Route: /products\n"
    ) in output
    assert output.index("**From Home**") < output.index("**From Login**") < output.index("**From Checkout**")
    assert "**From Navigation Bar**" not in output


def test_narrative_components_auth_and_flows(storefront) -> None:
    output = NarrativeRenderer().render(storefront)

    assert "### Navigation Bar\n- **Description**: Top navigation with cart icon\n" in output
    assert "- **Appears On**: home, products\n- **Position**: top\n" in output
    assert "- **Public Pages**: home, login, products\n- **Protected Pages**: cart, checkout\n" in output
    assert "  - Username: testuser\n  - Password: password123\n" in output
    assert "### Purchase\n1. Log in\n2. Add a product to the cart\n3. Check out\n" in output


def test_narrative_options_drop_sections(storefront) -> None:
    options = NarrativeOptions(include_auth=False, include_components=False, include_flows=False)

    output = NarrativeRenderer().render(storefront, options)

    assert "## Global Components" not in output
    assert "## Authentication" not in output
    assert "## Common User Flows" not in output
    assert "## Navigation Flow" in output


def test_narrative_without_authentication_omits_section(graph_builder: GraphBuilder) -> None:
    graph_builder.page("home", "Home", route="/")

    output = NarrativeRenderer().render(graph_builder.build())

    assert "## Authentication" not in output
    assert "## Common User Flows" not in output


def test_narrative_is_plain_text(graph_builder: GraphBuilder) -> None:
    graph_builder.page("home", "Home", route="/", description="Bell\x07 \u2014 \u201cquoted\u201d\r\nnext")
    graph = graph_builder.build()

    output = NarrativeRenderer().render(graph)

    assert '- **Description**: Bell \u2014 \u201cquoted\u201d\nnext\n' in output
    assert all(char == "\n" or ord(char) >= 32 for char in output)
    assert output.endswith("\n") and not output.endswith("\n\n")


def test_narrative_is_deterministic(storefront) -> None:
    renderer = NarrativeRenderer()

    assert renderer.render(storefront) == renderer.render(storefront)
