"""Helper utilities for constructing site graph documents in tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml

from sitebrief.models import Graph
from sitebrief.store import GraphStore


def element(
    element_type: str,
    description: str,
    selector: str | None = None,
    **extra: str,
) -> Dict[str, Any]:
    """Return an element descriptor in the document schema."""
    entry: Dict[str, Any] = {"type": element_type, "description": description}
    if selector is not None:
        entry["selector"] = selector
    entry.update(extra)
    return entry


class GraphBuilder:
    """Utility for assembling a graph document and loading it through the store."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "site"
        self.root.mkdir()
        self.document: Dict[str, Any] = {
            "metadata": {"name": "Test Store", "baseUrl": "https://shop.test", "version": "1.0.0"},
            "nodes": [],
            "edges": [],
        }
        self._store = GraphStore()

    def page(
        self,
        node_id: str,
        name: str | None = None,
        *,
        route: str | None = None,
        description: str = "",
        requires_auth: bool = False,
        elements: Iterable[Dict[str, Any]] = (),
        products: Iterable[Dict[str, Any]] = (),
        entry_point: bool | None = None,
        next_steps: Iterable[str] = (),
        actions: Iterable[str] = (),
    ) -> "GraphBuilder":
        node: Dict[str, Any] = {
            "id": node_id,
            "type": "page",
            "name": name or node_id.title(),
            "route": route if route is not None else f"/{node_id}",
            "description": description,
            "requiresAuth": requires_auth,
            "elements": list(elements),
        }
        products = list(products)
        if products:
            node["products"] = products
        next_steps = list(next_steps)
        actions = list(actions)
        if entry_point is not None or next_steps or actions:
            flow: Dict[str, Any] = {"nextSteps": next_steps, "actions": actions}
            if entry_point is not None:
                flow["entryPoint"] = entry_point
            node["userFlow"] = flow
        self.document["nodes"].append(node)
        return self

    def component(
        self,
        node_id: str,
        name: str | None = None,
        *,
        description: str = "",
        appears_on: Iterable[str] = (),
        elements: Iterable[Dict[str, Any]] = (),
        position: str | None = None,
    ) -> "GraphBuilder":
        node: Dict[str, Any] = {
            "id": node_id,
            "type": "component",
            "name": name or node_id.title(),
            "description": description,
            "appearsOn": list(appears_on),
            "elements": list(elements),
        }
        if position is not None:
            node["position"] = position
        self.document["nodes"].append(node)
        return self

    def edge(
        self,
        source: str,
        target: str,
        *,
        kind: str = "navigation",
        trigger: str = "",
        description: str = "",
    ) -> "GraphBuilder":
        self.document["edges"].append(
            {"from": source, "to": target, "type": kind, "trigger": trigger, "description": description}
        )
        return self

    def authentication(
        self,
        *,
        public: Iterable[str] = (),
        protected: Iterable[str] = (),
        credentials: Optional[tuple[str, str]] = ("testuser", "password123"),
        required: bool = True,
    ) -> "GraphBuilder":
        auth: Dict[str, Any] = {
            "required": required,
            "publicPages": list(public),
            "protectedPages": list(protected),
        }
        if credentials is not None:
            auth["defaultCredentials"] = {"username": credentials[0], "password": credentials[1]}
        self.document["authentication"] = auth
        return self

    def pattern(self, name: str, steps: Iterable[str]) -> "GraphBuilder":
        self.document.setdefault("commonPatterns", []).append({"name": name, "steps": list(steps)})
        return self

    def build(self) -> Graph:
        """Validate the current document and return the graph."""
        return self._store.from_mapping(copy.deepcopy(self.document))

    def write(self, filename: str = "website-graph.json") -> Path:
        """Serialise the document as JSON (or YAML for .yml/.yaml names)."""
        path = self.root / filename
        if path.suffix in {".yml", ".yaml"}:
            path.write_text(yaml.safe_dump(self.document, sort_keys=False), encoding="utf-8")
        else:
            path.write_text(json.dumps(self.document, indent=2), encoding="utf-8")
        return path

    def path(self) -> Path:
        """Return the directory the builder writes into."""
        return self.root


def build_storefront(builder: GraphBuilder) -> GraphBuilder:
    """Populate ``builder`` with a small shop: five pages, one navbar, one cycle, one diamond."""
    builder.page(
        "home",
        "Home",
        route="/",
        description="Landing page with featured products",
        elements=[
            element("button", "Login button", "#login-btn"),
            element("link", "Shop link", "a.shop"),
            element("text", "Hero banner"),
        ],
        entry_point=True,
        next_steps=["login", "products"],
    )
    builder.page(
        "login",
        "Login",
        route="/login",
        description="Sign in form",
        elements=[
            element("input", "Username field", "#username", placeholder="Enter username"),
            element("input", "Password field", "#password"),
            element("button", "Submit button", "button[type=submit]", text="Sign in"),
        ],
        next_steps=["products"],
        actions=["Enter credentials", "Submit the form"],
    )
    builder.page(
        "products",
        "Products",
        route="/products",
        description="Catalogue listing",
        products=[
            {"name": "Laptop", "price": "$999", "category": "Electronics"},
            {"name": "Mouse", "price": "$25", "category": "Electronics"},
            {"name": "Desk", "price": "$300", "category": "Furniture"},
        ],
    )
    builder.page(
        "cart",
        "Shopping Cart",
        route="/cart",
        description="Items selected for purchase",
        requires_auth=True,
        elements=[element("button", "Checkout button", "#checkout")],
        actions=["Review items", "Proceed to checkout"],
    )
    builder.page(
        "checkout",
        "Checkout",
        route="/checkout",
        description="Payment and shipping details",
        requires_auth=True,
    )
    builder.component(
        "navbar",
        "Navigation Bar",
        description="Top navigation with cart icon",
        appears_on=["home", "products"],
        elements=[element("link", "Cart icon", ".cart-icon")],
        position="top",
    )
    builder.edge("home", "login", trigger="click_login", description="Navigate to login page")
    builder.edge("home", "products", trigger="click_shop", description="Browse products")
    builder.edge("login", "products", trigger="login_success", description="Successful login redirects to products")
    builder.edge("products", "cart", trigger="add_to_cart", description="Add a product to the cart")
    builder.edge("cart", "checkout", trigger="click_checkout", description="Proceed to checkout")
    builder.edge("checkout", "home", trigger="order_complete", description="Order confirmation returns home")
    builder.edge("navbar", "cart", kind="interaction", trigger="click_cart", description="Open the cart from the navbar")
    builder.authentication(public=["home", "login", "products"], protected=["cart", "checkout"])
    builder.pattern("Purchase", ["Log in", "Add a product to the cart", "Check out"])
    return builder


__all__ = ["GraphBuilder", "build_storefront", "element"]
