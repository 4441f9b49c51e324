# loader.py
from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .errors import (
    DirectoryEntryError,
    InvalidExtension,
    UnitDirectoryError,
    UnitLoadError,
    UnitParseError,
    UnitReadError,
    UnitValidationError,
    UnsupportedUnitType,
)
from .model import UnitFile, UnitType


@dataclass(frozen=True)
class SkippedUnit:
    """A file the directory scan could not load, and why."""
    path: Path
    error: UnitLoadError


@dataclass
class LoadReport:
    units: List[UnitFile] = field(default_factory=list)
    skipped: List[SkippedUnit] = field(default_factory=list)


def unit_type_for(path: str | Path) -> UnitType:
    """Map a file extension (".service", ".target") to its UnitType."""
    path = Path(path)
    ext = path.suffix[1:]
    if not ext:
        raise InvalidExtension(path)
    try:
        return UnitType.from_str(ext)
    except ValueError:
        raise UnsupportedUnitType(path, ext) from None


def load_unit(path: str | Path) -> UnitFile:
    """
    Load and validate a single unit file.

    The declared [unit].type must match the file extension.
    Raises a UnitLoadError subclass; never returns an invalid unit.
    """
    path = Path(path)
    ext_type = unit_type_for(path)

    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnitReadError(path, str(e)) from e

    try:
        data = tomllib.loads(contents)
    except tomllib.TOMLDecodeError as e:
        raise UnitParseError(path, str(e)) from e

    try:
        unit = UnitFile.from_dict(data)
    except ValueError as e:
        raise UnitParseError(path, str(e)) from e

    violations = unit.validate()
    if unit.unit_type is not ext_type:
        violations.append(
            f"declared type '{unit.unit_type}' does not match extension '.{path.suffix[1:]}'"
        )
    if violations:
        raise UnitValidationError(path, violations)

    return unit


def load_units(directory: str | Path, *, strict: bool = False) -> LoadReport:
    """
    Load every unit file in `directory` (not recursive).

    Files are visited in name order. Sub-directories are ignored.
    A file that fails to load is recorded in `report.skipped`, or raised
    when `strict` is set. Directory-level failures are always raised.
    """
    directory = Path(directory)
    try:
        it = os.scandir(directory)
    except OSError as e:
        raise UnitDirectoryError(directory, str(e)) from e

    entries: List[os.DirEntry] = []
    with it:
        while True:
            try:
                entry = next(it)
            except StopIteration:
                break
            except OSError as e:
                raise DirectoryEntryError(directory, str(e)) from e
            entries.append(entry)

    report = LoadReport()
    for entry in sorted(entries, key=lambda e: e.name):
        try:
            if not entry.is_file():
                continue
        except OSError as e:
            raise DirectoryEntryError(directory, str(e)) from e

        path = Path(entry.path)
        try:
            report.units.append(load_unit(path))
        except UnitLoadError as e:
            if strict:
                raise
            report.skipped.append(SkippedUnit(path=path, error=e))

    return report
