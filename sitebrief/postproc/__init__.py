"""Post-processing helpers for rendered briefings."""

from .lint import BriefingLinter

__all__ = ["BriefingLinter"]
