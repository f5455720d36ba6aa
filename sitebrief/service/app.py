"""FastAPI application entrypoint for sitebrief service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel

from ..config import load_config
from ..errors import (
    MissingCredentialsError,
    NoRootFoundError,
    NotFoundError,
    UnknownNodeError,
    ValidationError,
)
from ..explorer import GraphExplorer
from ..logging import get_logger
from ..models import Graph
from ..renderers import (
    NOTATIONS,
    DiagramRenderer,
    DigestRenderer,
    InteractiveMapRenderer,
    NarrativeOptions,
    NarrativeRenderer,
    TaskBriefingRenderer,
    TreeTextRenderer,
)
from ..store import GraphStore, dump_graph
from ..traversal import TraversalEngine

T = TypeVar("T")


class TaskRequest(BaseModel):
    task: str


class TaskResponse(BaseModel):
    task: str
    context: str
    relevant_pages: List[str]


class HealthResponse(BaseModel):
    status: str
    graph_loaded: bool = False


def _default_graph_loader() -> Graph:
    config = load_config(Path.cwd())
    return GraphStore().load(config.graph_path)


async def _run_blocking(func: Callable[[], T]) -> T:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def create_app(
    graph_loader: Callable[[], Graph] = _default_graph_loader,
    *,
    templates_dir: Optional[Path] = None,
) -> FastAPI:
    """Create the FastAPI application serving briefings for one site graph.

    The graph is loaded on first use and kept on ``app.state.graph``.
    """

    app = FastAPI(title="SiteBrief Service", version="1.0.0")
    app.state.graph = None
    logger = get_logger("service")

    engine = TraversalEngine()
    narrative = NarrativeRenderer()
    digest = DigestRenderer()
    tree_text = TreeTextRenderer(engine)
    diagram = DiagramRenderer()
    interactive_map = InteractiveMapRenderer(templates_dir, engine=engine)
    task_briefing = TaskBriefingRenderer()

    async def get_graph(request: Request) -> Graph:
        state = request.app.state
        if state.graph is None:
            state.graph = await _run_blocking(graph_loader)
            logger.info(
                "Loaded site graph %s (%d nodes, %d edges)",
                state.graph.metadata.name,
                len(state.graph.nodes),
                len(state.graph.edges),
            )
        return state.graph

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        return HealthResponse(status="ok", graph_loaded=request.app.state.graph is not None)

    @app.get("/graph")
    async def graph_document(graph: Graph = Depends(get_graph)) -> Dict[str, Any]:
        return dump_graph(graph)

    @app.get("/context", response_class=PlainTextResponse)
    async def context(
        include_auth: bool = True,
        include_components: bool = True,
        include_flows: bool = True,
        graph: Graph = Depends(get_graph),
    ) -> str:
        options = NarrativeOptions(
            include_auth=include_auth,
            include_components=include_components,
            include_flows=include_flows,
        )
        return await _run_blocking(lambda: narrative.render(graph, options))

    @app.get("/reference", response_class=PlainTextResponse)
    async def reference(graph: Graph = Depends(get_graph)) -> str:
        return await _run_blocking(lambda: digest.render(graph))

    @app.get("/tree", response_class=PlainTextResponse)
    async def tree(root: Optional[str] = None, graph: Graph = Depends(get_graph)) -> str:
        def _render() -> str:
            navigation = engine.build_tree(graph, root) if root is not None else None
            return tree_text.render(graph, navigation)

        return await _run_blocking(_render)

    @app.get("/diagram/{notation}", response_class=PlainTextResponse)
    async def diagram_source(notation: str, graph: Graph = Depends(get_graph)) -> str:
        if notation not in NOTATIONS:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown diagram notation '{notation}'; expected one of {', '.join(NOTATIONS)}",
            )
        return await _run_blocking(lambda: diagram.render(graph, notation))

    @app.get("/map", response_class=HTMLResponse)
    async def tree_map(graph: Graph = Depends(get_graph)) -> str:
        return await _run_blocking(lambda: interactive_map.render(graph))

    @app.get("/nodes/{node_id}", response_class=PlainTextResponse)
    async def node_details(node_id: str, graph: Graph = Depends(get_graph)) -> str:
        return GraphExplorer(graph).describe_page(node_id)

    @app.get("/nodes/{node_id}/paths", response_class=PlainTextResponse)
    async def node_paths(node_id: str, graph: Graph = Depends(get_graph)) -> str:
        return GraphExplorer(graph).describe_paths(node_id)

    @app.post("/task", response_model=TaskResponse)
    async def task(payload: TaskRequest, graph: Graph = Depends(get_graph)) -> TaskResponse:
        def _run_task() -> TaskResponse:
            relevant = task_briefing.matcher.match(graph, payload.task)
            return TaskResponse(
                task=payload.task,
                context=task_briefing.render_matches(graph, relevant),
                relevant_pages=list(relevant.ids),
            )

        return await _run_blocking(_run_task)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_: Any, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(UnknownNodeError)
    async def unknown_node_handler(_: Any, exc: UnknownNodeError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_: Any, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "issues": [str(issue) for issue in exc.issues]},
        )

    @app.exception_handler(MissingCredentialsError)
    async def missing_credentials_handler(_: Any, exc: MissingCredentialsError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc), "pages": exc.pages})

    @app.exception_handler(NoRootFoundError)
    async def no_root_handler(_: Any, exc: NoRootFoundError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    graph_path: Path, host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app(lambda: GraphStore().load(graph_path))
    uvicorn.run(app, host=host, port=port)


__all__ = ["HealthResponse", "TaskRequest", "TaskResponse", "create_app", "run_service"]
