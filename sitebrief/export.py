"""PNG export of written diagram sources through the Mermaid CLI and Graphviz."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .constants import ARTIFACT_FILENAMES, PNG_EXPORTS
from .errors import ExportError
from .logging import get_logger

_INSTALL_HINTS = {
    "mmdc": "npm install -g @mermaid-js/mermaid-cli",
    "dot": "install the graphviz package",
}


class DiagramExporter:
    """Renders ``graph.mermaid`` and ``graph.dot`` to PNG when the tools are on PATH.

    A missing tool is logged and skipped; a tool that fails raises
    :class:`ExportError`.
    """

    def __init__(
        self,
        runner: Callable[[Sequence[str]], None] | None = None,
        *,
        which: Callable[[str], Optional[str]] | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self._which = which or shutil.which
        self.logger = get_logger("export")

    def export(self, sources: Iterable[Path]) -> List[Path]:
        """Export the diagram sources found among ``sources``; returns written PNG paths."""
        by_name = {path.name: path for path in sources}
        written: List[Path] = []
        for artifact, (tool, png_name) in PNG_EXPORTS.items():
            source = by_name.get(ARTIFACT_FILENAMES[artifact])
            if source is None:
                self.logger.debug("Skipping %s: %s was not generated", png_name, ARTIFACT_FILENAMES[artifact])
                continue
            executable = self._which(tool)
            if executable is None:
                self.logger.warning(
                    "%s not found; skipping %s (%s)", tool, png_name, _INSTALL_HINTS[tool]
                )
                continue
            target = source.with_name(png_name)
            self._runner(self._command(tool, executable, source, target))
            self.logger.info("Wrote %s", target)
            written.append(target)
        return written

    @staticmethod
    def _command(tool: str, executable: str, source: Path, target: Path) -> List[str]:
        if tool == "mmdc":
            return [executable, "-i", str(source), "-o", str(target), "-w", "2000", "-H", "1500"]
        return [executable, "-Tpng", str(source), "-o", str(target)]

    @staticmethod
    def _default_runner(args: Sequence[str]) -> None:
        try:
            subprocess.run(list(args), check=True, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise ExportError(f"Unable to run '{args[0]}'") from exc
        except subprocess.CalledProcessError as exc:
            raise ExportError(
                f"{Path(args[0]).name} failed with exit code {exc.returncode}: {exc.stderr.strip()}"
            ) from exc


__all__ = ["DiagramExporter"]
