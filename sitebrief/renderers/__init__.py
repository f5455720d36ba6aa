"""Renderers that derive briefing artifacts from a validated site graph."""

from .base import Renderer
from .diagram import NOTATIONS, DiagramRenderer
from .digest import DigestRenderer
from .interactive_map import InteractiveMapRenderer
from .narrative import NarrativeOptions, NarrativeRenderer
from .task_briefing import TaskBriefingRenderer
from .tree_text import TreeTextRenderer

__all__ = [
    "DiagramRenderer",
    "DigestRenderer",
    "InteractiveMapRenderer",
    "NOTATIONS",
    "NarrativeOptions",
    "NarrativeRenderer",
    "Renderer",
    "TaskBriefingRenderer",
    "TreeTextRenderer",
]
