# plan.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .dag import resolve
from .errors import LoadFailure, UnitLoadError
from .loader import LoadReport, SkippedUnit, load_units
from .model import UnitFile


@dataclass
class Resolution:
    """Ordered units for a directory, plus the files the scan skipped."""
    order: List[UnitFile] = field(default_factory=list)
    skipped: List[SkippedUnit] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [u.name for u in self.order]


def load_directory(directory: str | Path, *, strict: bool = False) -> LoadReport:
    """load_units(), with loader errors wrapped in LoadFailure."""
    try:
        return load_units(directory, strict=strict)
    except UnitLoadError as e:
        raise LoadFailure(e) from e


def resolve_directory(directory: str | Path, *, strict: bool = False) -> Resolution:
    """
    Load a unit directory and order it.

    Callers only need to handle ResolutionError.
    """
    report = load_directory(directory, strict=strict)
    return Resolution(order=resolve(report.units), skipped=report.skipped)


def load_and_resolve(directory: str | Path, *, strict: bool = False) -> List[UnitFile]:
    return resolve_directory(directory, strict=strict).order
