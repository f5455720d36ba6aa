"""Select the pages of a site graph that a free-text task mentions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from .logging import get_logger
from .models import Graph, Page


@dataclass(frozen=True)
class RelevanceSet:
    """Pages matched to a task, in graph declaration order."""

    task: str
    tokens: Tuple[str, ...]
    pages: Tuple[Page, ...]

    def __bool__(self) -> bool:
        return bool(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(page.id for page in self.pages)


class RelevanceMatcher:
    """Keyword matcher: a page is relevant when any task token occurs in its text.

    Tokens match as plain substrings of ``"<name> <description> <route>"``, so
    short words such as ``"a"`` or ``"in"`` match broadly.
    """

    def __init__(self) -> None:
        self.logger = get_logger("relevance")

    def match(self, graph: Graph, task_text: str) -> RelevanceSet:
        tokens = tuple(task_text.lower().split())
        if not tokens:
            return RelevanceSet(task=task_text, tokens=(), pages=())

        matched = []
        for page in graph.pages:
            page_text = f"{page.name} {page.description} {page.route}".lower()
            if any(token in page_text for token in tokens):
                matched.append(page)

        self.logger.debug(
            "Task matched %d of %d pages using %d token(s)", len(matched), len(graph.pages), len(tokens)
        )
        return RelevanceSet(task=task_text, tokens=tokens, pages=tuple(matched))


__all__ = ["RelevanceMatcher", "RelevanceSet"]
