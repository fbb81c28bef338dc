"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and key-value
lines) or machines (--json). The formatter layer adapts ServiceResult
to the requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from verial.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from verial.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the root CLI group."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    ``--json`` wins over ``--quiet``; otherwise a Rich rendering is used.
    """
    s = settings or OutputSettings()
    if s.json_output:
        return result.model_dump_json(indent=2)
    if s.quiet:
        return render_quiet(result)
    return render_result(result, verbose=s.verbose)
