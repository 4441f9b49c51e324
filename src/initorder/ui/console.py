"""Console output formatting utilities for initorder."""

from __future__ import annotations

import json
import sys
from typing import Iterable, Optional, Sequence

from initorder.loader import SkippedUnit
from initorder.model import UnitFile


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_order(self, units: Sequence[UnitFile]) -> None:
        """Print the resolved order, one numbered unit per line."""
        width = len(str(len(units)))
        for i, unit in enumerate(units, start=1):
            print(f"{i:>{width}}. {unit.name} ({unit.unit_type})")

    def print_levels(self, levels: Sequence[Sequence[UnitFile]]) -> None:
        """Print stages; units inside one stage have no ordering between them."""
        for idx, level in enumerate(levels, start=1):
            names = ", ".join(u.name for u in level)
            print(f"Stage {idx}: {names}")

    def print_json(self, units: Iterable[UnitFile]) -> None:
        """Print units as a JSON array of unit documents."""
        print(json.dumps([u.to_dict() for u in units], indent=2))

    def print_json_levels(self, levels: Sequence[Sequence[UnitFile]]) -> None:
        """Print stages as a JSON array of arrays of unit documents."""
        print(json.dumps([[u.to_dict() for u in level] for level in levels], indent=2))

    def print_skipped(self, skipped: Sequence[SkippedUnit]) -> None:
        """Print files the directory scan could not load (stderr)."""
        if not skipped:
            return
        print(f"SKIPPED: {len(skipped)} file(s)", file=sys.stderr)
        for s in skipped:
            print(f"  {s.path.name}: {s.error}", file=sys.stderr)

    def print_check_ok(self, path: str, unit: UnitFile) -> None:
        print(f"OK {unit.name} ({path})")

    def print_check_failed(self, path: str, reason: str, violations: Optional[list[str]] = None) -> None:
        print(f"FAILED {path}", file=sys.stderr)
        print(f"  {reason}", file=sys.stderr)
        for v in violations or []:
            print(f"  - {v}", file=sys.stderr)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(exc)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
