"""Shared constants for artifact generation and configuration."""

from __future__ import annotations

CONFIG_FILENAME = ".sitebrief.yml"
DEFAULT_GRAPH_FILENAME = "website-graph.json"
DEFAULT_OUTPUT_DIR = "output"

DEFAULT_ARTIFACTS: tuple[str, ...] = (
    "full_context",
    "quick_reference",
    "tree_structure",
    "context_json",
    "tree_map",
    "mermaid",
    "dot",
)

ARTIFACT_FILENAMES: dict[str, str] = {
    "full_context": "full-context.md",
    "quick_reference": "quick-reference.md",
    "tree_structure": "tree-structure.txt",
    "context_json": "context.json",
    "tree_map": "tree-map.html",
    "mermaid": "graph.mermaid",
    "dot": "graph.dot",
}

# Diagram artifact -> (external tool, PNG file name).
PNG_EXPORTS: dict[str, tuple[str, str]] = {
    "mermaid": ("mmdc", "graph-mermaid.png"),
    "dot": ("dot", "graph-dot.png"),
}


__all__ = [
    "ARTIFACT_FILENAMES",
    "CONFIG_FILENAME",
    "DEFAULT_ARTIFACTS",
    "DEFAULT_GRAPH_FILENAME",
    "DEFAULT_OUTPUT_DIR",
    "PNG_EXPORTS",
]
