"""Tests for sitebrief.relevance."""

from __future__ import annotations

from sitebrief.relevance import RelevanceMatcher
from tests._fixtures.graph_builder import GraphBuilder


def test_token_substring_matches_page(graph_builder: GraphBuilder) -> None:
    graph_builder.page("home", "Home", route="/", description="Welcome")
    graph_builder.page("login", "Login", route="/login", description="sign in page")
    graph = graph_builder.build()

    relevant = RelevanceMatcher().match(graph, "login and checkout")

    assert "login" in relevant.ids
    assert relevant.tokens == ("login", "and", "checkout")


def test_empty_task_yields_empty_set(storefront) -> None:
    matcher = RelevanceMatcher()

    for task in ("", "   \n\t"):
        relevant = matcher.match(storefront, task)
        assert not relevant
        assert len(relevant) == 0
        assert relevant.ids == ()


def test_matches_keep_declaration_order(storefront) -> None:
    relevant = RelevanceMatcher().match(storefront, "checkout the CART")

    assert relevant.ids == ("cart", "checkout")


def test_matching_is_substring_not_whole_word(storefront) -> None:
    # "shop" only occurs inside "Shopping Cart".
    relevant = RelevanceMatcher().match(storefront, "sign shop")

    assert relevant.ids == ("login", "cart")


def test_components_are_never_relevant(storefront) -> None:
    relevant = RelevanceMatcher().match(storefront, "navigation bar icon")

    assert all(page.id != "navbar" for page in relevant)


def test_no_match_yields_empty_set(storefront) -> None:
    assert not RelevanceMatcher().match(storefront, "zzz qqq")
