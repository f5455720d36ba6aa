"""Turn a declarative website graph into briefings for browsing agents."""

from .errors import (
    ConfigError,
    ExportError,
    MissingCredentialsError,
    NoRootFoundError,
    NotFoundError,
    SiteBriefError,
    UnknownNodeError,
    ValidationError,
    ValidationIssue,
)
from .export import DiagramExporter
from .generator import ArtifactGenerator
from .models import Component, Edge, EdgeKind, Graph, NodeKind, Page
from .relevance import RelevanceMatcher, RelevanceSet
from .store import GraphStore, dump_graph, load_graph
from .traversal import NavigationTree, TraversalEngine, TreeEntry

__version__ = "0.1.0"

__all__ = [
    "ArtifactGenerator",
    "Component",
    "ConfigError",
    "DiagramExporter",
    "Edge",
    "EdgeKind",
    "ExportError",
    "Graph",
    "GraphStore",
    "MissingCredentialsError",
    "NavigationTree",
    "NoRootFoundError",
    "NodeKind",
    "NotFoundError",
    "Page",
    "RelevanceMatcher",
    "RelevanceSet",
    "SiteBriefError",
    "TraversalEngine",
    "TreeEntry",
    "UnknownNodeError",
    "ValidationError",
    "ValidationIssue",
    "dump_graph",
    "load_graph",
]
