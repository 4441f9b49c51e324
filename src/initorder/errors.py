# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


# ----------------------------------------------------------------------
# Load-time errors (unit files, directories, references)
# ----------------------------------------------------------------------

class UnitLoadError(Exception):
    """Base class for failures while loading unit definitions."""


@dataclass
class InvalidExtension(UnitLoadError):
    path: Path

    def __str__(self) -> str:
        return f"Missing or invalid file extension: {self.path}"


@dataclass
class UnsupportedUnitType(UnitLoadError):
    path: Path
    extension: str

    def __str__(self) -> str:
        return f"Unsupported unit type extension: {self.extension} ({self.path})"


@dataclass
class UnitReadError(UnitLoadError):
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Failed to read unit file {self.path}: {self.reason}"


@dataclass
class UnitParseError(UnitLoadError):
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Invalid unit format in file {self.path}: {self.reason}"


@dataclass
class UnitValidationError(UnitLoadError):
    """
    A unit failed validate() or its declared type does not match its
    source. `path` is None for units built in code.
    """
    path: Optional[Path]
    violations: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        where = f" in {self.path}" if self.path is not None else ""
        head = f"Validation failed or unit type mismatch{where}"
        if not self.violations:
            return head
        return head + ": " + "; ".join(self.violations)


@dataclass
class UnitDirectoryError(UnitLoadError):
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Failed to read unit directory {self.path}: {self.reason}"


@dataclass
class DirectoryEntryError(UnitLoadError):
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Invalid unit file entry in directory {self.path}: {self.reason}"


@dataclass
class MissingDependency(UnitLoadError):
    unit: str
    dependency: str

    def __str__(self) -> str:
        return f'"{self.unit}" depends on missing unit "{self.dependency}"'


# ----------------------------------------------------------------------
# Resolution errors (graph build + ordering)
# ----------------------------------------------------------------------

class ResolutionError(Exception):
    """Base class for failures while ordering units. Always terminal."""


@dataclass
class LoadFailure(ResolutionError):
    error: UnitLoadError

    def __str__(self) -> str:
        return str(self.error)


@dataclass
class DependencyCycle(ResolutionError):
    """
    `unit` is one unit on the cycle; `cycle` is the loop in edge order,
    starting and ending with `unit` (e.g. ("x", "y", "x")).
    """
    unit: str
    cycle: Tuple[str, ...] = ()

    def __str__(self) -> str:
        msg = f"Cycle detected involving: {self.unit}"
        if self.cycle:
            msg += f" ({' -> '.join(self.cycle)})"
        return msg


@dataclass
class DuplicateUnitName(ResolutionError):
    name: str

    def __str__(self) -> str:
        return f'Duplicate unit name: "{self.name}"'
