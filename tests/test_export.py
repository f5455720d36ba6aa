"""Tests for sitebrief.export."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Sequence

import pytest

from sitebrief.errors import ExportError
from sitebrief.export import DiagramExporter


class _RecordingRunner:
    def __init__(self) -> None:
        self.calls: List[List[str]] = []

    def __call__(self, args: Sequence[str]) -> None:
        self.calls.append(list(args))
        Path(args[args.index("-o") + 1]).write_bytes(b"\x89PNG")


def _sources(tmp_path: Path, *names: str) -> List[Path]:
    paths = []
    for name in names:
        path = tmp_path / name
        path.write_text("graph TD\n", encoding="utf-8")
        paths.append(path)
    return paths


def test_export_runs_both_renderers(tmp_path: Path) -> None:
    runner = _RecordingRunner()
    exporter = DiagramExporter(runner, which=lambda tool: f"/usr/bin/{tool}")
    mermaid, dot = _sources(tmp_path, "graph.mermaid", "graph.dot")

    written = exporter.export([tmp_path / "context.json", mermaid, dot])

    assert written == [tmp_path / "graph-mermaid.png", tmp_path / "graph-dot.png"]
    assert runner.calls == [
        ["/usr/bin/mmdc", "-i", str(mermaid), "-o", str(written[0]), "-w", "2000", "-H", "1500"],
        ["/usr/bin/dot", "-Tpng", str(dot), "-o", str(written[1])],
    ]
    assert all(path.exists() for path in written)


def test_missing_tool_is_skipped(tmp_path: Path) -> None:
    runner = _RecordingRunner()
    exporter = DiagramExporter(runner, which=lambda tool: "/usr/bin/dot" if tool == "dot" else None)

    written = exporter.export(_sources(tmp_path, "graph.mermaid", "graph.dot"))

    assert written == [tmp_path / "graph-dot.png"]
    assert [call[0] for call in runner.calls] == ["/usr/bin/dot"]


def test_sources_not_written_are_skipped(tmp_path: Path) -> None:
    runner = _RecordingRunner()
    exporter = DiagramExporter(runner, which=lambda tool: f"/usr/bin/{tool}")

    assert exporter.export(_sources(tmp_path, "full-context.md")) == []
    assert runner.calls == []


def test_failing_renderer_raises_export_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(args: List[str], **_: object) -> None:
        raise subprocess.CalledProcessError(2, args, stderr="syntax error in line 3\n")

    monkeypatch.setattr("sitebrief.export.subprocess.run", _fail)
    exporter = DiagramExporter(which=lambda tool: f"/usr/bin/{tool}")

    with pytest.raises(ExportError) as excinfo:
        exporter.export(_sources(tmp_path, "graph.dot"))

    assert str(excinfo.value) == "dot failed with exit code 2: syntax error in line 3"
