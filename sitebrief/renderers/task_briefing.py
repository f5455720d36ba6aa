"""Task-scoped briefing: only the pages a task mentions, plus login details."""

from __future__ import annotations

from typing import List

from ..errors import MissingCredentialsError
from ..models import Graph
from ..postproc.lint import BriefingLinter
from ..relevance import RelevanceMatcher, RelevanceSet


class TaskBriefingRenderer:
    """Combines relevance matching with per-page formatting for one task."""

    name = "task_briefing"

    def __init__(
        self,
        matcher: RelevanceMatcher | None = None,
        linter: BriefingLinter | None = None,
    ) -> None:
        self.matcher = matcher or RelevanceMatcher()
        self.linter = linter or BriefingLinter()

    def render(self, graph: Graph, task_text: str) -> str:
        relevant = self.matcher.match(graph, task_text)
        return self.render_matches(graph, relevant)

    def render_matches(self, graph: Graph, relevant: RelevanceSet) -> str:
        task = " ".join(relevant.task.split())
        lines: List[str] = ["# Task Context", "", f"**Task**: {task}", ""]
        if relevant:
            lines.extend(self._relevant_pages(relevant))
            protected = [page.id for page in relevant if page.requires_auth]
            if protected:
                lines.extend(self._authentication(graph, protected))
        return self.linter.lint("\n".join(lines))

    @staticmethod
    def _relevant_pages(relevant: RelevanceSet) -> List[str]:
        lines = ["## Relevant Pages", ""]
        for page in relevant:
            lines.append(f"### {page.name}")
            lines.append(f"- Route: {page.route}")
            if page.description:
                lines.append(f"- {page.description}")
            if page.user_flow is not None and page.user_flow.actions:
                lines.append("- **Actions Available**:")
                lines.extend(f"  - {action}" for action in page.user_flow.actions)
            if page.elements:
                lines.append("- **Interactive Elements**:")
                for element in page.elements:
                    suffix = f" (`{element.selector}`)" if element.selector else ""
                    lines.append(f"  - {element.description}{suffix}")
            lines.append("")
        return lines

    @staticmethod
    def _authentication(graph: Graph, protected: List[str]) -> List[str]:
        auth = graph.authentication
        credentials = auth.default_credentials if auth is not None else None
        if credentials is None:
            where = "authentication.defaultCredentials" if auth is not None else "authentication"
            raise MissingCredentialsError(
                f"Task touches protected page(s) {', '.join(protected)} but the site graph "
                f"defines no {where}",
                pages=protected,
            )
        login_url = f"{graph.metadata.base_url.rstrip('/')}/login"
        return [
            "## Authentication Required",
            "",
            "This task requires authentication. Use the following credentials:",
            f"- Username: {credentials.username}",
            f"- Password: {credentials.password}",
            f"- Login page: {login_url}",
            "",
        ]


__all__ = ["TaskBriefingRenderer"]
