"""Core data models for site graphs shared across sitebrief components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Literal, Mapping, Optional, Tuple, Union

from .errors import UnknownNodeError


class NodeKind(str, Enum):
    """Discriminant for the two node variants."""

    PAGE = "page"
    COMPONENT = "component"


class EdgeKind(str, Enum):
    """Discriminant for the two edge variants."""

    NAVIGATION = "navigation"
    INTERACTION = "interaction"


@dataclass(frozen=True)
class GraphMetadata:
    """Opaque descriptive fields for the site."""

    name: str = ""
    base_url: str = ""
    version: str = ""


@dataclass(frozen=True)
class Element:
    """Interactive element descriptor on a page or component."""

    type: str
    description: str
    selector: Optional[str] = None
    placeholder: Optional[str] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class Product:
    """Catalogue entry shown on a page."""

    name: str
    price: str = ""
    category: str = ""


@dataclass(frozen=True)
class UserFlow:
    """How a user typically arrives at and leaves a page."""

    entry_point: bool = False
    next_steps: Tuple[str, ...] = ()
    actions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Page:
    """A routable screen of the site."""

    id: str
    name: str
    route: str
    description: str = ""
    elements: Tuple[Element, ...] = ()
    requires_auth: bool = False
    products: Tuple[Product, ...] = ()
    user_flow: Optional[UserFlow] = None
    kind: Literal[NodeKind.PAGE] = field(default=NodeKind.PAGE, init=False)


@dataclass(frozen=True)
class Component:
    """A reusable UI fragment rendered on one or more pages."""

    id: str
    name: str
    description: str = ""
    elements: Tuple[Element, ...] = ()
    appears_on: Tuple[str, ...] = ()
    position: Optional[str] = None
    kind: Literal[NodeKind.COMPONENT] = field(default=NodeKind.COMPONENT, init=False)


Node = Union[Page, Component]


@dataclass(frozen=True)
class Edge:
    """Directed relation between two nodes."""

    source: str
    target: str
    kind: EdgeKind
    trigger: str = ""
    description: str = ""


@dataclass(frozen=True)
class Credentials:
    """Default login pair used by testing agents."""

    username: str
    password: str


@dataclass(frozen=True)
class Authentication:
    """Which pages are public or protected, plus default credentials."""

    required: bool = False
    public_pages: Tuple[str, ...] = ()
    protected_pages: Tuple[str, ...] = ()
    default_credentials: Optional[Credentials] = None


@dataclass(frozen=True)
class CommonPattern:
    """Named, ordered list of human-readable steps."""

    name: str
    steps: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Graph:
    """Immutable site graph; all cross references are plain node ids."""

    metadata: GraphMetadata
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    authentication: Optional[Authentication] = None
    common_patterns: Tuple[CommonPattern, ...] = ()
    _index: Mapping[str, Node] = field(init=False, repr=False, compare=False)
    _outgoing: Mapping[str, Tuple[Edge, ...]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {node.id: node for node in self.nodes}
        outgoing: Dict[str, List[Edge]] = {}
        for edge in self.edges:
            outgoing.setdefault(edge.source, []).append(edge)
        object.__setattr__(self, "_index", MappingProxyType(index))
        object.__setattr__(
            self, "_outgoing", MappingProxyType({key: tuple(value) for key, value in outgoing.items()})
        )

    def find_node(self, node_id: str) -> Optional[Node]:
        """Return the node with ``node_id`` or ``None``."""
        return self._index.get(node_id)

    def node(self, node_id: str) -> Node:
        """Return the node with ``node_id``; raises :class:`UnknownNodeError` when absent."""
        node = self._index.get(node_id)
        if node is None:
            raise UnknownNodeError(node_id)
        return node

    def nodes_of_kind(self, kind: NodeKind) -> Tuple[Node, ...]:
        """Return nodes of one variant in declaration order."""
        return tuple(node for node in self.nodes if node.kind is kind)

    def edges_from(self, node_id: str, kind: Optional[EdgeKind] = None) -> Tuple[Edge, ...]:
        """Return outgoing edges of ``node_id`` in declaration order, optionally filtered by kind."""
        edges = self._outgoing.get(node_id, ())
        if kind is None:
            return edges
        return tuple(edge for edge in edges if edge.kind is kind)

    @property
    def pages(self) -> Tuple[Page, ...]:
        return self.nodes_of_kind(NodeKind.PAGE)  # type: ignore[return-value]

    @property
    def components(self) -> Tuple[Component, ...]:
        return self.nodes_of_kind(NodeKind.COMPONENT)  # type: ignore[return-value]


__all__ = [
    "Authentication",
    "CommonPattern",
    "Component",
    "Credentials",
    "Edge",
    "EdgeKind",
    "Element",
    "Graph",
    "GraphMetadata",
    "Node",
    "NodeKind",
    "Page",
    "Product",
    "UserFlow",
]
