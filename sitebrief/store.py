"""Loading, parsing, and structural validation of site graph documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

import yaml

from .errors import NotFoundError, ValidationError, ValidationIssue
from .logging import get_logger
from .models import (
    Authentication,
    CommonPattern,
    Component,
    Credentials,
    Edge,
    EdgeKind,
    Element,
    Graph,
    GraphMetadata,
    Node,
    NodeKind,
    Page,
    Product,
    UserFlow,
)

GraphSource = Union[str, Path]

_YAML_SUFFIXES = {".yaml", ".yml"}


class GraphStore:
    """Builds immutable :class:`Graph` values from structured documents.

    Validation is all-or-nothing: every problem found in the document is
    collected and reported in a single :class:`ValidationError`; no partially
    valid graph is ever returned.
    """

    def __init__(self) -> None:
        self.logger = get_logger("store")

    def load(self, source: GraphSource) -> Graph:
        """Read and validate the graph document at ``source``."""
        path = Path(source).expanduser()
        if not path.is_file():
            raise NotFoundError(f"Site graph not found: {path}", source=str(path))
        fmt = "yaml" if path.suffix.lower() in _YAML_SUFFIXES else "json"
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ValidationError.from_issues(
                [ValidationIssue(path="<document>", detail=f"invalid UTF-8: {exc}")]
            ) from exc
        graph = self.loads(text, fmt=fmt)
        self.logger.info(
            "Loaded site graph %s: %d nodes, %d edges", path.name, len(graph.nodes), len(graph.edges)
        )
        return graph

    def loads(self, text: str, *, fmt: str = "json") -> Graph:
        """Parse ``text`` as JSON or YAML and validate it."""
        fmt = fmt.lower()
        if fmt == "json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValidationError.from_issues(
                    [ValidationIssue(path="<document>", detail=f"invalid JSON: {exc}")]
                ) from exc
        elif fmt in {"yaml", "yml"}:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ValidationError.from_issues(
                    [ValidationIssue(path="<document>", detail=f"invalid YAML: {exc}")]
                ) from exc
        else:
            raise ValueError(f"Unsupported graph format: {fmt}")
        return self.from_mapping(data)

    def from_mapping(self, data: Any) -> Graph:
        """Validate an already-parsed document and build the graph."""
        parser = _GraphParser()
        graph = parser.parse(data)
        if graph is None:
            self.logger.debug("Rejected site graph with %d issues", len(parser.issues))
            raise ValidationError.from_issues(parser.issues)
        return graph


def load_graph(source: GraphSource) -> Graph:
    """Convenience wrapper around :meth:`GraphStore.load`."""
    return GraphStore().load(source)


class _GraphParser:
    """Single-use parser that accumulates validation issues."""

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def parse(self, data: Any) -> Optional[Graph]:
        if not isinstance(data, Mapping):
            self._issue("<document>", "root must be a mapping with metadata, nodes and edges")
            return None

        metadata = self._parse_metadata(data.get("metadata"))
        nodes = self._parse_nodes(data.get("nodes"))
        edges = self._parse_edges(data.get("edges"))
        authentication = self._parse_authentication(data.get("authentication"))
        patterns = self._parse_patterns(data.get("commonPatterns"))

        node_ids = self._check_unique_ids(nodes)
        self._check_edge_refs(edges, node_ids)
        self._check_node_refs(nodes, node_ids)
        if authentication is not None:
            self._check_auth_refs(authentication, node_ids)

        if self.issues:
            return None
        return Graph(
            metadata=metadata,
            nodes=tuple(node for _, node in nodes),
            edges=tuple(edge for _, edge in edges),
            authentication=authentication,
            common_patterns=patterns,
        )

    # -- sections -----------------------------------------------------------

    def _parse_metadata(self, value: Any) -> GraphMetadata:
        if value is None:
            return GraphMetadata()
        if not isinstance(value, Mapping):
            self._issue("metadata", "must be a mapping")
            return GraphMetadata()
        return GraphMetadata(
            name=_opaque(value.get("name")),
            base_url=_opaque(value.get("baseUrl")),
            version=_opaque(value.get("version")),
        )

    def _parse_nodes(self, value: Any) -> List[Tuple[str, Node]]:
        items = self._sequence(value, "nodes", required=True)
        nodes: List[Tuple[str, Node]] = []
        for index, raw in enumerate(items):
            path = f"nodes[{index}]"
            node = self._parse_node(raw, path)
            if node is not None:
                nodes.append((path, node))
        return nodes

    def _parse_node(self, raw: Any, path: str) -> Optional[Node]:
        if not isinstance(raw, Mapping):
            self._issue(path, "must be a mapping")
            return None
        node_id = self._required_str(raw, "id", path)
        name = self._required_str(raw, "name", path)
        kind = self._kind(raw, path, NodeKind)
        description = self._optional_str(raw, "description", path) or ""
        elements = self._parse_elements(raw.get("elements"), f"{path}.elements")
        if kind is None:
            return None

        if kind is NodeKind.PAGE:
            route = self._required_str(raw, "route", path)
            requires_auth = self._optional_bool(raw, "requiresAuth", path)
            products = self._parse_products(raw.get("products"), f"{path}.products")
            user_flow = self._parse_user_flow(raw.get("userFlow"), f"{path}.userFlow")
            if node_id is None or name is None or route is None:
                return None
            return Page(
                id=node_id,
                name=name,
                route=route,
                description=description,
                elements=elements,
                requires_auth=bool(requires_auth),
                products=products,
                user_flow=user_flow,
            )

        appears_on = self._str_tuple(raw.get("appearsOn"), f"{path}.appearsOn")
        position = self._optional_str(raw, "position", path)
        if node_id is None or name is None:
            return None
        return Component(
            id=node_id,
            name=name,
            description=description,
            elements=elements,
            appears_on=appears_on,
            position=position,
        )

    def _parse_elements(self, value: Any, path: str) -> Tuple[Element, ...]:
        elements: List[Element] = []
        for index, raw in enumerate(self._sequence(value, path)):
            item_path = f"{path}[{index}]"
            if not isinstance(raw, Mapping):
                self._issue(item_path, "must be a mapping")
                continue
            element_type = self._required_str(raw, "type", item_path)
            description = self._required_str(raw, "description", item_path)
            if element_type is None or description is None:
                continue
            elements.append(
                Element(
                    type=element_type,
                    description=description,
                    selector=self._optional_str(raw, "selector", item_path),
                    placeholder=self._optional_str(raw, "placeholder", item_path),
                    text=self._optional_str(raw, "text", item_path),
                )
            )
        return tuple(elements)

    def _parse_products(self, value: Any, path: str) -> Tuple[Product, ...]:
        products: List[Product] = []
        for index, raw in enumerate(self._sequence(value, path)):
            item_path = f"{path}[{index}]"
            if not isinstance(raw, Mapping):
                self._issue(item_path, "must be a mapping")
                continue
            name = self._required_str(raw, "name", item_path)
            if name is None:
                continue
            products.append(
                Product(
                    name=name,
                    price=_opaque(raw.get("price")),
                    category=_opaque(raw.get("category")),
                )
            )
        return tuple(products)

    def _parse_user_flow(self, value: Any, path: str) -> Optional[UserFlow]:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            self._issue(path, "must be a mapping")
            return None
        entry_point = self._optional_bool(value, "entryPoint", path)
        return UserFlow(
            entry_point=bool(entry_point),
            next_steps=self._str_tuple(value.get("nextSteps"), f"{path}.nextSteps"),
            actions=self._str_tuple(value.get("actions"), f"{path}.actions"),
        )

    def _parse_edges(self, value: Any) -> List[Tuple[str, Edge]]:
        edges: List[Tuple[str, Edge]] = []
        for index, raw in enumerate(self._sequence(value, "edges", required=True)):
            path = f"edges[{index}]"
            if not isinstance(raw, Mapping):
                self._issue(path, "must be a mapping")
                continue
            source = self._required_str(raw, "from", path)
            target = self._required_str(raw, "to", path)
            kind = self._kind(raw, path, EdgeKind)
            trigger = self._optional_str(raw, "trigger", path) or ""
            description = self._optional_str(raw, "description", path) or ""
            if source is None or target is None or kind is None:
                continue
            edges.append(
                (
                    path,
                    Edge(source=source, target=target, kind=kind, trigger=trigger, description=description),
                )
            )
        return edges

    def _parse_authentication(self, value: Any) -> Optional[Authentication]:
        if value is None:
            return None
        path = "authentication"
        if not isinstance(value, Mapping):
            self._issue(path, "must be a mapping")
            return None
        credentials = None
        raw_credentials = value.get("defaultCredentials")
        if raw_credentials is not None:
            cred_path = f"{path}.defaultCredentials"
            if not isinstance(raw_credentials, Mapping):
                self._issue(cred_path, "must be a mapping")
            else:
                username = self._required_str(raw_credentials, "username", cred_path)
                password = self._required_str(raw_credentials, "password", cred_path)
                if username is not None and password is not None:
                    credentials = Credentials(username=username, password=password)
        return Authentication(
            required=bool(self._optional_bool(value, "required", path)),
            public_pages=self._str_tuple(value.get("publicPages"), f"{path}.publicPages"),
            protected_pages=self._str_tuple(value.get("protectedPages"), f"{path}.protectedPages"),
            default_credentials=credentials,
        )

    def _parse_patterns(self, value: Any) -> Tuple[CommonPattern, ...]:
        if value is None:
            return ()
        path = "commonPatterns"
        if isinstance(value, Mapping):
            entries = [{"name": key, "steps": steps} for key, steps in value.items()]
        else:
            entries = list(self._sequence(value, path))
        patterns: List[CommonPattern] = []
        for index, raw in enumerate(entries):
            item_path = f"{path}[{index}]"
            if not isinstance(raw, Mapping):
                self._issue(item_path, "must be a mapping")
                continue
            name = self._required_str(raw, "name", item_path)
            if "steps" not in raw:
                self._issue(f"{item_path}.steps", "missing required field 'steps'")
                continue
            steps = self._str_tuple(raw.get("steps"), f"{item_path}.steps")
            if name is not None:
                patterns.append(CommonPattern(name=name, steps=steps))
        return tuple(patterns)

    # -- referential integrity ---------------------------------------------

    def _check_unique_ids(self, nodes: Sequence[Tuple[str, Node]]) -> Set[str]:
        seen: Dict[str, str] = {}
        for path, node in nodes:
            if node.id in seen:
                self._issue(
                    f"{path}.id",
                    f"duplicate node id '{node.id}' (first declared at {seen[node.id]})",
                    ref=node.id,
                )
                continue
            seen[node.id] = path
        return set(seen)

    def _check_edge_refs(self, edges: Sequence[Tuple[str, Edge]], node_ids: Set[str]) -> None:
        for path, edge in edges:
            for key, ref in (("from", edge.source), ("to", edge.target)):
                if ref not in node_ids:
                    self._dangling(f"{path}.{key}", ref)

    def _check_node_refs(self, nodes: Sequence[Tuple[str, Node]], node_ids: Set[str]) -> None:
        for path, node in nodes:
            if node.kind is NodeKind.PAGE:
                if node.user_flow is None:
                    continue
                for index, ref in enumerate(node.user_flow.next_steps):
                    if ref not in node_ids:
                        self._dangling(f"{path}.userFlow.nextSteps[{index}]", ref)
            elif node.kind is NodeKind.COMPONENT:
                for index, ref in enumerate(node.appears_on):
                    if ref not in node_ids:
                        self._dangling(f"{path}.appearsOn[{index}]", ref)

    def _check_auth_refs(self, auth: Authentication, node_ids: Set[str]) -> None:
        for key, refs in (("publicPages", auth.public_pages), ("protectedPages", auth.protected_pages)):
            for index, ref in enumerate(refs):
                if ref not in node_ids:
                    self._dangling(f"authentication.{key}[{index}]", ref)
        protected = set(auth.protected_pages)
        for ref in auth.public_pages:
            if ref in protected:
                self._issue(
                    "authentication",
                    f"node '{ref}' is listed in both publicPages and protectedPages",
                    ref=ref,
                )

    # -- field helpers -------------------------------------------------------

    def _issue(self, path: str, detail: str, *, ref: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue(path=path, detail=detail, ref=ref))

    def _dangling(self, path: str, ref: str) -> None:
        self._issue(path, f"dangling reference to unknown node '{ref}'", ref=ref)

    def _sequence(self, value: Any, path: str, *, required: bool = False) -> Sequence[Any]:
        if value is None:
            if required:
                self._issue(path, f"missing required field '{path}'")
            return ()
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            self._issue(path, "must be a list")
            return ()
        return value

    def _required_str(self, raw: Mapping[str, Any], key: str, path: str) -> Optional[str]:
        value = raw.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            self._issue(f"{path}.{key}", f"missing required field '{key}'")
            return None
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            self._issue(f"{path}.{key}", f"field '{key}' must be a string")
            return None
        return str(value)

    def _optional_str(self, raw: Mapping[str, Any], key: str, path: str) -> Optional[str]:
        value = raw.get(key)
        if value is None:
            return None
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            self._issue(f"{path}.{key}", f"field '{key}' must be a string")
            return None
        return str(value)

    def _optional_bool(self, raw: Mapping[str, Any], key: str, path: str) -> Optional[bool]:
        value = raw.get(key)
        if value is None:
            return None
        if not isinstance(value, bool):
            self._issue(f"{path}.{key}", f"field '{key}' must be a boolean")
            return None
        return value

    def _str_tuple(self, value: Any, path: str) -> Tuple[str, ...]:
        items: List[str] = []
        for index, item in enumerate(self._sequence(value, path)):
            if not isinstance(item, str):
                self._issue(f"{path}[{index}]", "must be a string")
                continue
            items.append(item)
        return tuple(items)

    def _kind(self, raw: Mapping[str, Any], path: str, enum_type: Any) -> Any:
        value = raw.get("kind", raw.get("type"))
        if value is None:
            self._issue(f"{path}.kind", "missing required field 'kind'")
            return None
        try:
            return enum_type(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(member.value for member in enum_type)
            self._issue(f"{path}.kind", f"unknown kind '{value}' (expected one of: {allowed})")
            return None


def _opaque(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def dump_graph(graph: Graph) -> Dict[str, Any]:
    """Return the structural passthrough of ``graph`` in the input document schema."""
    nodes: List[Dict[str, Any]] = []
    for node in graph.nodes:
        entry: Dict[str, Any] = {
            "id": node.id,
            "type": node.kind.value,
            "name": node.name,
        }
        if node.kind is NodeKind.PAGE:
            entry["route"] = node.route
        entry["description"] = node.description
        if node.kind is NodeKind.PAGE:
            entry["requiresAuth"] = node.requires_auth
        else:
            entry["appearsOn"] = list(node.appears_on)
            if node.position is not None:
                entry["position"] = node.position
        entry["elements"] = [_dump_element(element) for element in node.elements]
        if node.kind is NodeKind.PAGE:
            if node.products:
                entry["products"] = [
                    {"name": product.name, "price": product.price, "category": product.category}
                    for product in node.products
                ]
            if node.user_flow is not None:
                entry["userFlow"] = {
                    "entryPoint": node.user_flow.entry_point,
                    "nextSteps": list(node.user_flow.next_steps),
                    "actions": list(node.user_flow.actions),
                }
        nodes.append(entry)

    document: Dict[str, Any] = {
        "metadata": {
            "name": graph.metadata.name,
            "baseUrl": graph.metadata.base_url,
            "version": graph.metadata.version,
        },
        "nodes": nodes,
        "edges": [
            {
                "from": edge.source,
                "to": edge.target,
                "type": edge.kind.value,
                "trigger": edge.trigger,
                "description": edge.description,
            }
            for edge in graph.edges
        ],
    }
    auth = graph.authentication
    if auth is not None:
        auth_entry: Dict[str, Any] = {
            "required": auth.required,
            "publicPages": list(auth.public_pages),
            "protectedPages": list(auth.protected_pages),
        }
        if auth.default_credentials is not None:
            auth_entry["defaultCredentials"] = {
                "username": auth.default_credentials.username,
                "password": auth.default_credentials.password,
            }
        document["authentication"] = auth_entry
    document["commonPatterns"] = [
        {"name": pattern.name, "steps": list(pattern.steps)} for pattern in graph.common_patterns
    ]
    return document


def _dump_element(element: Element) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"type": element.type, "description": element.description}
    for key in ("selector", "placeholder", "text"):
        value = getattr(element, key)
        if value is not None:
            entry[key] = value
    return entry


__all__ = ["GraphSource", "GraphStore", "dump_graph", "load_graph"]
