"""CLI entrypoints for sitebrief commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import SiteBriefConfig, load_config
from .errors import (
    ConfigError,
    ExportError,
    MissingCredentialsError,
    NoRootFoundError,
    NotFoundError,
    UnknownNodeError,
    ValidationError,
)
from .explorer import GraphExplorer
from .export import DiagramExporter
from .generator import ArtifactGenerator
from .logging import configure_logging
from .models import Graph
from .renderers import (
    NOTATIONS,
    DiagramRenderer,
    DigestRenderer,
    InteractiveMapRenderer,
    NarrativeOptions,
    NarrativeRenderer,
    TaskBriefingRenderer,
    TreeTextRenderer,
)
from .store import GraphStore, dump_graph
from .traversal import TraversalEngine


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_node_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("node_id", help="Id of the page or component to inspect.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitebrief",
        description="Derive agent briefings, trees, and diagrams from a website graph.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--graph",
        default=None,
        help="Path to the site graph document (JSON or YAML). Defaults to the config value.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .sitebrief.yml or the directory containing it (defaults to current directory).",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Write every artifact to the output directory.")
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("--output", default=None, help="Directory to write artifacts into.")
    generate_parser.add_argument(
        "--png",
        action="store_true",
        help="Also render graph.mermaid and graph.dot to PNG when mmdc or dot is installed.",
    )

    context_parser = subparsers.add_parser("context", help="Print the full narrative briefing.")
    _add_verbose_option(context_parser, suppress_default=True)
    context_parser.add_argument("--no-auth", action="store_true", help="Omit the authentication section.")
    context_parser.add_argument("--no-components", action="store_true", help="Omit global components.")
    context_parser.add_argument("--no-flows", action="store_true", help="Omit common user flows.")

    reference_parser = subparsers.add_parser("reference", help="Print the quick reference digest.")
    _add_verbose_option(reference_parser, suppress_default=True)

    tree_parser = subparsers.add_parser("tree", help="Print the ASCII navigation tree.")
    _add_verbose_option(tree_parser, suppress_default=True)
    tree_parser.add_argument("--root", default=None, help="Page id to root the tree at.")

    diagram_parser = subparsers.add_parser("diagram", help="Print a diagram encoding of the graph.")
    _add_verbose_option(diagram_parser, suppress_default=True)
    diagram_parser.add_argument("notation", choices=NOTATIONS, help="Diagram language to emit.")

    map_parser = subparsers.add_parser("map", help="Print the interactive HTML map.")
    _add_verbose_option(map_parser, suppress_default=True)

    json_parser = subparsers.add_parser("json", help="Print the validated graph as JSON.")
    _add_verbose_option(json_parser, suppress_default=True)

    task_parser = subparsers.add_parser("task", help="Print a briefing scoped to a task description.")
    _add_verbose_option(task_parser, suppress_default=True)
    task_parser.add_argument("task", nargs="+", help="Free-text task description.")

    full_parser = subparsers.add_parser("full", help="Display the full graph structure.")
    _add_verbose_option(full_parser, suppress_default=True)

    pages_parser = subparsers.add_parser("pages", help="List all pages.")
    _add_verbose_option(pages_parser, suppress_default=True)

    page_parser = subparsers.add_parser("page", help="Display details for one node.")
    _add_verbose_option(page_parser, suppress_default=True)
    _add_node_argument(page_parser)

    paths_parser = subparsers.add_parser("paths", help="Display navigation paths from a page.")
    _add_verbose_option(paths_parser, suppress_default=True)
    _add_node_argument(paths_parser)

    serve_parser = subparsers.add_parser("serve", help="Serve briefings over HTTP.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sitebrief commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    graph_path = Path(args.graph) if args.graph else config.graph_path

    if args.command == "serve":
        try:
            from .service import run_service
        except ModuleNotFoundError:
            parser.exit(
                1,
                "FastAPI is required for service mode. Install it with `pip install sitebrief[service]`.\n",
            )

        try:
            run_service(graph_path, host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
        return

    try:
        graph = GraphStore().load(graph_path)
        output = _run_command(args, graph, config)
    except NotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except ValidationError as exc:
        details = "\n".join(f"  - {issue}" for issue in exc.issues)
        parser.exit(1, f"Invalid site graph {graph_path}:\n{details}\n")
    except (NoRootFoundError, MissingCredentialsError, UnknownNodeError, ExportError) as exc:
        parser.exit(1, f"sitebrief {args.command} failed: {exc}\n")
    except Exception as exc:  # pragma: no cover - defensive guard
        parser.exit(1, f"sitebrief {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    sys.stdout.write(output)


def _run_command(args: argparse.Namespace, graph: Graph, config: SiteBriefConfig) -> str:
    if args.command == "generate":
        output_dir = Path(args.output) if args.output else config.output_dir
        generator = ArtifactGenerator(
            narrative_options=config.narrative,
            root_id=config.root_id,
            templates_dir=config.templates_dir,
        )
        written = generator.write_all(graph, output_dir, config.artifacts)
        if args.png:
            written.extend(DiagramExporter().export(list(written)))
        lines = [f"Wrote {_relativize(path)}" for path in written]
        return "\n".join(lines) + "\n"
    if args.command == "context":
        options = NarrativeOptions(
            include_auth=config.narrative.include_auth and not args.no_auth,
            include_components=config.narrative.include_components and not args.no_components,
            include_flows=config.narrative.include_flows and not args.no_flows,
        )
        return NarrativeRenderer().render(graph, options)
    if args.command == "reference":
        return DigestRenderer().render(graph)
    if args.command == "tree":
        engine = TraversalEngine()
        root_id = args.root or config.root_id
        tree = engine.build_tree(graph, root_id) if root_id else None
        return TreeTextRenderer(engine).render(graph, tree)
    if args.command == "diagram":
        return DiagramRenderer().render(graph, args.notation)
    if args.command == "map":
        return InteractiveMapRenderer(config.templates_dir).render(graph)
    if args.command == "json":
        return json.dumps(dump_graph(graph), indent=2, ensure_ascii=False) + "\n"
    if args.command == "task":
        return TaskBriefingRenderer().render(graph, " ".join(args.task))
    explorer = GraphExplorer(graph)
    if args.command == "full":
        return explorer.describe_graph()
    if args.command == "pages":
        return explorer.list_pages()
    if args.command == "page":
        return explorer.describe_page(args.node_id)
    if args.command == "paths":
        return explorer.describe_paths(args.node_id)
    raise ValueError(f"Unknown command {args.command}")  # pragma: no cover - argparse enforces choices


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
