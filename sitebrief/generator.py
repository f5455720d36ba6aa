"""Artifact generation: render every briefing view and write it to disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .constants import ARTIFACT_FILENAMES, DEFAULT_ARTIFACTS
from .logging import get_logger
from .models import Graph
from .renderers import (
    DiagramRenderer,
    DigestRenderer,
    InteractiveMapRenderer,
    NarrativeOptions,
    NarrativeRenderer,
    TreeTextRenderer,
)
from .store import dump_graph
from .traversal import NavigationTree, TraversalEngine


class ArtifactGenerator:
    """Coordinates the renderers that share one graph and one navigation tree."""

    def __init__(
        self,
        *,
        narrative_options: NarrativeOptions | None = None,
        root_id: str | None = None,
        templates_dir: Path | None = None,
        engine: TraversalEngine | None = None,
    ) -> None:
        self.narrative_options = narrative_options or NarrativeOptions()
        self.root_id = root_id
        self.engine = engine or TraversalEngine()
        self.narrative = NarrativeRenderer()
        self.digest = DigestRenderer()
        self.tree_text = TreeTextRenderer(self.engine)
        self.diagram = DiagramRenderer()
        self.interactive_map = InteractiveMapRenderer(templates_dir, engine=self.engine)
        self.logger = get_logger("generator")

    def render_all(self, graph: Graph, artifacts: Iterable[str] | None = None) -> Dict[str, str]:
        """Render the requested artifacts (all by default), keyed by artifact name."""
        selected = self._select(artifacts)
        tree = self._tree(graph)
        rendered: Dict[str, str] = {}
        for name in selected:
            rendered[name] = self._render_one(name, graph, tree)
            self.logger.debug("Rendered %s (%d chars)", name, len(rendered[name]))
        return rendered

    def write_all(
        self,
        graph: Graph,
        output_dir: Path,
        artifacts: Iterable[str] | None = None,
    ) -> List[Path]:
        """Render artifacts and write them under ``output_dir``; returns written paths."""
        output_dir.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []
        for name, content in self.render_all(graph, artifacts).items():
            target = output_dir / ARTIFACT_FILENAMES[name]
            target.write_text(content, encoding="utf-8")
            self.logger.info("Wrote %s", target)
            written.append(target)
        return written

    def _render_one(self, name: str, graph: Graph, tree: Optional[NavigationTree]) -> str:
        if name == "full_context":
            return self.narrative.render(graph, self.narrative_options)
        if name == "quick_reference":
            return self.digest.render(graph)
        if name == "tree_structure":
            return self.tree_text.render(graph, tree)
        if name == "context_json":
            return json.dumps(dump_graph(graph), indent=2, ensure_ascii=False) + "\n"
        if name == "tree_map":
            return self.interactive_map.render(graph, tree)
        if name == "mermaid":
            return self.diagram.render_flowchart(graph)
        if name == "dot":
            return self.diagram.render_digraph(graph)
        raise ValueError(f"Unknown artifact '{name}'")

    def _tree(self, graph: Graph) -> Optional[NavigationTree]:
        if not graph.pages:
            self.logger.warning("Site graph has no pages; navigation tree omitted")
            return None
        return self.engine.build_tree(graph, self.root_id)

    @staticmethod
    def _select(artifacts: Iterable[str] | None) -> List[str]:
        if artifacts is None:
            return list(DEFAULT_ARTIFACTS)
        requested = set(artifacts)
        unknown = sorted(requested - set(DEFAULT_ARTIFACTS))
        if unknown:
            raise ValueError(f"Unknown artifacts requested: {', '.join(unknown)}")
        return [name for name in DEFAULT_ARTIFACTS if name in requested]


__all__ = ["ArtifactGenerator"]
