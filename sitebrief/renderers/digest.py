"""Condensed quick reference: routes plus selectors."""

from __future__ import annotations

from typing import List, Sequence

from ..models import Element, Graph
from ..postproc.lint import BriefingLinter
from .base import Renderer, selector_elements


class DigestRenderer(Renderer):
    """Lists every route and the selector-bearing elements per page and component."""

    name = "digest"

    def __init__(self, linter: BriefingLinter | None = None) -> None:
        self.linter = linter or BriefingLinter()

    def render(self, graph: Graph) -> str:
        lines: List[str] = [f"# Quick Reference: {graph.metadata.name}", "", "## Routes"]
        for page in graph.pages:
            suffix = " (Auth Required)" if page.requires_auth else ""
            lines.append(f"- `{page.route}` - {page.name}{suffix}")

        lines.extend(["", "## Key Selectors", ""])
        blocks = 0
        for node in (*graph.pages, *graph.components):
            elements = selector_elements(node.elements)
            if not elements:
                continue
            lines.extend(self._selector_block(node.name, elements))
            blocks += 1
        if not blocks:
            lines.append("No selectors declared.")
        return self.linter.lint("\n".join(lines))

    @staticmethod
    def _selector_block(title: str, elements: Sequence[Element]) -> List[str]:
        lines = [f"### {title}"]
        lines.extend(f"- {element.description}: `{element.selector}`" for element in elements)
        lines.append("")
        return lines


__all__ = ["DigestRenderer"]
