from .model import (
    UnitType,
    UnitSection,
    TodoSection,
    ServiceSection,
    TargetSection,
    DependencySection,
    UnitFile,
)
from .errors import (
    UnitLoadError,
    InvalidExtension,
    UnsupportedUnitType,
    UnitReadError,
    UnitParseError,
    UnitValidationError,
    UnitDirectoryError,
    DirectoryEntryError,
    MissingDependency,
    ResolutionError,
    LoadFailure,
    DependencyCycle,
    DuplicateUnitName,
)
from .dag import resolve, resolve_levels
from .loader import load_unit, load_units, LoadReport, SkippedUnit
from .plan import load_and_resolve, load_directory, resolve_directory, Resolution
from .dsl import UnitBuilder, service, target

__all__ = [
    "UnitType", "UnitSection", "TodoSection", "ServiceSection", "TargetSection",
    "DependencySection", "UnitFile",
    "UnitLoadError", "InvalidExtension", "UnsupportedUnitType", "UnitReadError",
    "UnitParseError", "UnitValidationError", "UnitDirectoryError", "DirectoryEntryError",
    "MissingDependency", "ResolutionError", "LoadFailure", "DependencyCycle",
    "DuplicateUnitName",
    "resolve", "resolve_levels",
    "load_unit", "load_units", "LoadReport", "SkippedUnit",
    "load_and_resolve", "load_directory", "resolve_directory", "Resolution",
    "UnitBuilder", "service", "target",
]
