# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class UnitType(str, Enum):
    """Kind of unit. The textual form is lowercase."""
    SERVICE = "service"
    TARGET = "target"

    @classmethod
    def from_str(cls, text: str) -> UnitType:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported unit type: {text!r}") from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UnitSection:
    unit_name: str
    unit_type: UnitType
    description: Optional[str] = None


@dataclass(frozen=True)
class TodoSection:
    """What to run. Opaque here; only `path` is checked."""
    path: str
    args: Tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # freeze the containers so a validated unit stays as loaded
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))


@dataclass(frozen=True)
class ServiceSection:
    command_on_restart: Optional[str] = None
    command_on_stop: Optional[str] = None


@dataclass(frozen=True)
class TargetSection:
    is_runnable_once: bool = False


@dataclass(frozen=True)
class DependencySection:
    """
    Ordering constraints, by unit name.

      needs_before: this unit runs strictly BEFORE each named unit
      needs_after:  this unit runs strictly AFTER each named unit
    """
    needs_before: Tuple[str, ...] = ()
    needs_after: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "needs_before", tuple(self.needs_before))
        object.__setattr__(self, "needs_after", tuple(self.needs_after))


@dataclass(frozen=True)
class UnitFile:
    """
    One unit definition: identity, command, type-specific section and
    ordering constraints.

    Exactly one of `service` / `target` is expected, matching
    `unit.unit_type`. Use validate() to check.
    """
    unit: UnitSection
    todo: TodoSection
    service: Optional[ServiceSection] = None
    target: Optional[TargetSection] = None
    dependency: DependencySection = field(default_factory=DependencySection)

    @property
    def name(self) -> str:
        return self.unit.unit_name

    @property
    def unit_type(self) -> UnitType:
        return self.unit.unit_type

    def validate(self) -> list[str]:
        """
        Check every rule and return all violations (empty list = valid).
        """
        errors: list[str] = []

        if not self.unit.unit_name.strip():
            errors.append("Unit name cannot be empty")

        if not self.todo.path.strip():
            errors.append("Todo path cannot be empty")

        if self.unit.unit_type is UnitType.SERVICE and self.service is None:
            errors.append("Service unit requires [service] section")
        elif self.unit.unit_type is UnitType.TARGET and self.target is None:
            errors.append("Target unit requires [target] section")

        for dep in self.dependency.needs_before + self.dependency.needs_after:
            if not dep.strip():
                errors.append("Dependency name cannot be empty")

        return errors

    def is_valid(self) -> bool:
        return not self.validate()

    # ------------------------------------------------------------------
    # dict (TOML document) form
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UnitFile:
        """
        Decode a parsed unit document.

        Raises ValueError naming the offending key if a required table or
        key is missing or has the wrong type. Unknown keys are ignored.
        """
        unit = _table(data, "unit")
        todo = _table(data, "todo")

        raw_type = _string(unit, "type", "unit")
        try:
            unit_type = UnitType.from_str(raw_type)
        except ValueError as e:
            raise ValueError(f"[unit].type: {e}") from None

        service = None
        if "service" in data:
            svc = _table(data, "service")
            service = ServiceSection(
                command_on_restart=_opt_string(svc, "restart", "service"),
                command_on_stop=_opt_string(svc, "stop", "service"),
            )

        target = None
        if "target" in data:
            tgt = _table(data, "target")
            once = tgt.get("once")
            if not isinstance(once, bool):
                raise ValueError("[target].once must be a boolean")
            target = TargetSection(is_runnable_once=once)

        dependency = DependencySection()
        if "dependency" in data:
            dep = _table(data, "dependency")
            dependency = DependencySection(
                needs_before=_string_list(dep, "before", "dependency", default=()),
                needs_after=_string_list(dep, "after", "dependency", default=()),
            )

        env = todo.get("env")
        if not isinstance(env, Mapping):
            raise ValueError("[todo].env must be a table")
        for k, v in env.items():
            if not isinstance(v, str):
                raise ValueError(f"[todo].env.{k} must be a string")

        return cls(
            unit=UnitSection(
                unit_name=_string(unit, "name", "unit"),
                unit_type=unit_type,
                description=_opt_string(unit, "description", "unit"),
            ),
            todo=TodoSection(
                path=_string(todo, "path", "todo"),
                args=_string_list(todo, "args", "todo"),
                env=dict(env),
            ),
            service=service,
            target=target,
            dependency=dependency,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the document form accepted by from_dict()."""
        unit: Dict[str, Any] = {
            "name": self.unit.unit_name,
            "type": self.unit.unit_type.value,
        }
        if self.unit.description is not None:
            unit["description"] = self.unit.description

        out: Dict[str, Any] = {
            "unit": unit,
            "todo": {
                "path": self.todo.path,
                "args": list(self.todo.args),
                "env": dict(self.todo.env),
            },
            "dependency": {
                "before": list(self.dependency.needs_before),
                "after": list(self.dependency.needs_after),
            },
        }

        if self.service is not None:
            svc: Dict[str, Any] = {}
            if self.service.command_on_restart is not None:
                svc["restart"] = self.service.command_on_restart
            if self.service.command_on_stop is not None:
                svc["stop"] = self.service.command_on_stop
            out["service"] = svc
        if self.target is not None:
            out["target"] = {"once": self.target.is_runnable_once}

        return out


# ----------------------------------------------------------------------
# decoding helpers
# ----------------------------------------------------------------------

_MISSING = object()


def _table(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, _MISSING)
    if value is _MISSING:
        raise ValueError(f"missing [{key}] table")
    if not isinstance(value, Mapping):
        raise ValueError(f"[{key}] must be a table")
    return value


def _string(table: Mapping[str, Any], key: str, where: str) -> str:
    value = table.get(key, _MISSING)
    if value is _MISSING:
        raise ValueError(f"missing [{where}].{key}")
    if not isinstance(value, str):
        raise ValueError(f"[{where}].{key} must be a string")
    return value


def _opt_string(table: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    if key not in table:
        return None
    return _string(table, key, where)


def _string_list(
    table: Mapping[str, Any],
    key: str,
    where: str,
    default: Any = _MISSING,
) -> Tuple[str, ...]:
    value = table.get(key, default)
    if value is _MISSING:
        raise ValueError(f"missing [{where}].{key}")
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"[{where}].{key} must be a list of strings")
    return tuple(value)
