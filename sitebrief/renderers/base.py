"""Base classes and shared formatting for graph renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence

from ..models import Element, Graph, Product


class Renderer(ABC):
    """Contract for side-effect-free renderers that turn a graph into text.

    Implementations must be total over validated graphs and return
    byte-identical output for identical inputs.
    """

    name: str = ""

    @abstractmethod
    def render(self, graph: Graph) -> str:
        """Render the artifact for ``graph``."""


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def join_ids(ids: Sequence[str], *, empty: str = "none") -> str:
    return ", ".join(ids) if ids else empty


def selector_elements(elements: Iterable[Element]) -> List[Element]:
    """Return the elements that declare a selector, preserving order."""
    return [element for element in elements if element.selector]


def product_categories(products: Iterable[Product]) -> List[str]:
    """Distinct non-empty categories in first-seen order."""
    categories: List[str] = []
    for product in products:
        if product.category and product.category not in categories:
            categories.append(product.category)
    return categories


__all__ = ["Renderer", "join_ids", "product_categories", "selector_elements", "yes_no"]
