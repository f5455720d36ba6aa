"""Tests for the Mermaid and DOT diagram renderers."""

from __future__ import annotations

import pytest

from sitebrief.renderers import DiagramRenderer
from tests._fixtures.graph_builder import GraphBuilder


def test_flowchart_shapes_and_connectors(storefront) -> None:
    output = DiagramRenderer().render_flowchart(storefront)
    lines = output.splitlines()

    assert lines[0] == "graph TD"
    assert "    %% Test Store Website Graph" in lines
    assert '    home[("Home<br/>/")]' in lines
    assert '    cart[/"Shopping Cart<br/>/cart"/]' in lines
    assert '    navbar["Navigation Bar"]:::component' in lines
    assert "    home --> login" in lines
    assert "    navbar -.-> cart" in lines
    assert "    class home publicPage" in lines
    assert "    class cart protectedPage" in lines
    assert not any(line.startswith("    class navbar") for line in lines)


def test_flowchart_edges_keep_declaration_order(storefront) -> None:
    lines = DiagramRenderer().render_flowchart(storefront).splitlines()
    edges = [line.strip() for line in lines if "-->" in line or "-.->" in line]

    assert edges == [
        "home --> login",
        "home --> products",
        "login --> products",
        "products --> cart",
        "cart --> checkout",
        "checkout --> home",
        "navbar -.-> cart",
    ]


def test_flowchart_sanitises_identifiers(graph_builder: GraphBuilder) -> None:
    graph_builder.page("end", "The End", route="/end")
    graph_builder.page("my page", 'Say "hi"', route="/hi")
    graph_builder.edge("end", "my page")

    output = DiagramRenderer().render_flowchart(graph_builder.build())

    assert '    end_[("The End<br/>/end")]' in output
    assert '    my_page[("Say #quot;hi#quot;<br/>/hi")]' in output
    assert "    end_ --> my_page" in output


def test_flowchart_ids_stay_distinct_after_sanitising(graph_builder: GraphBuilder) -> None:
    graph_builder.page("cart_view", "Cart", route="/cart")
    graph_builder.page("cart.view", "Cart Preview", route="/cart/preview", requires_auth=True)
    graph_builder.edge("cart_view", "cart.view")
    graph_builder.edge("cart.view", "cart_view")

    lines = DiagramRenderer().render_flowchart(graph_builder.build()).splitlines()

    assert '    cart_view[("Cart<br/>/cart")]' in lines
    assert '    cart_view_2[/"Cart Preview<br/>/cart/preview"/]' in lines
    assert "    cart_view --> cart_view_2" in lines
    assert "    cart_view_2 --> cart_view" in lines
    assert "    class cart_view publicPage" in lines
    assert "    class cart_view_2 protectedPage" in lines


def test_digraph_colours_styles_and_labels(storefront) -> None:
    output = DiagramRenderer().render_digraph(storefront)
    lines = output.splitlines()

    assert lines[0] == 'digraph "Test Store" {'
    assert '    "home" [label="Home\\n/", fillcolor="lightgreen", style="filled,rounded"];' in lines
    assert '    "cart" [label="Shopping Cart\\n/cart", fillcolor="orange", style="filled,rounded"];' in lines
    assert '    "navbar" [label="Navigation Bar", fillcolor="lightblue", style="filled,rounded"];' in lines
    assert '    "home" -> "login" [style="solid", label="click_login"];' in lines
    assert '    "navbar" -> "cart" [style="dashed", label="click_cart"];' in lines
    assert output.endswith("}\n")


def test_digraph_escapes_quotes(graph_builder: GraphBuilder) -> None:
    graph_builder.document["metadata"]["name"] = 'My "Shop"'
    graph_builder.page("home", "Home", route="/")

    output = DiagramRenderer().render_digraph(graph_builder.build())

    assert output.startswith('digraph "My \\"Shop\\"" {\n')


def test_render_dispatches_on_notation(storefront) -> None:
    renderer = DiagramRenderer()

    assert renderer.render(storefront) == renderer.render_flowchart(storefront)
    assert renderer.render(storefront, "dot") == renderer.render_digraph(storefront)
    with pytest.raises(ValueError):
        renderer.render(storefront, "svg")


def test_diagrams_are_deterministic(storefront) -> None:
    renderer = DiagramRenderer()

    assert renderer.render_flowchart(storefront) == renderer.render_flowchart(storefront)
    assert renderer.render_digraph(storefront) == renderer.render_digraph(storefront)
