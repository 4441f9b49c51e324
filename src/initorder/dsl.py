# src/initorder/dsl.py
from __future__ import annotations

from typing import Dict, List, Optional

from .errors import UnitValidationError
from .model import (
    DependencySection,
    ServiceSection,
    TargetSection,
    TodoSection,
    UnitFile,
    UnitSection,
    UnitType,
)


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class UnitBuilder:
    """
    Chained construction of a UnitFile.

        UnitBuilder("web", UnitType.SERVICE)
            .run("/usr/bin/web", "--port", "80")
            .after("network")
            .on_stop("/usr/bin/web --stop")
            .build()
    """

    def __init__(self, name: str, unit_type: UnitType | str = UnitType.SERVICE):
        self.name = name
        self.unit_type = UnitType.from_str(unit_type) if isinstance(unit_type, str) else unit_type
        self._description: Optional[str] = None
        self._path: str = ""
        self._args: list[str] = []
        self._env: dict[str, str] = {}
        self._before: list[str] = []
        self._after: list[str] = []

        # service knobs
        self._on_restart: Optional[str] = None
        self._on_stop: Optional[str] = None

        # target knobs
        self._once: bool = False

    def describe(self, text: str):
        self._description = text
        return self

    def run(self, path: str, *args: str):
        self._path = path
        self._args = list(args)
        return self

    def with_env(self, **env):
        self._env.update({k: str(v) for k, v in env.items()})
        return self

    def before(self, *unit_names: str):
        self._before.extend(unit_names)
        return self

    def after(self, *unit_names: str):
        self._after.extend(unit_names)
        return self

    def on_restart(self, cmd: str):
        self._on_restart = cmd
        return self

    def on_stop(self, cmd: str):
        self._on_stop = cmd
        return self

    def once(self, flag: bool = True):
        self._once = flag
        return self

    def build(self) -> UnitFile:
        service = None
        target = None
        if self.unit_type is UnitType.SERVICE:
            service = ServiceSection(
                command_on_restart=self._on_restart,
                command_on_stop=self._on_stop,
            )
        else:
            target = TargetSection(is_runnable_once=self._once)

        u = UnitFile(
            unit=UnitSection(
                unit_name=self.name,
                unit_type=self.unit_type,
                description=self._description,
            ),
            todo=TodoSection(path=self._path, args=self._args, env=self._env),
            service=service,
            target=target,
            dependency=DependencySection(
                needs_before=self._before,
                needs_after=self._after,
            ),
        )

        violations = u.validate()
        if violations:
            raise UnitValidationError(None, violations)
        return u


# ---------------------------------------------------------------------
# Functional helpers
# ---------------------------------------------------------------------

def service(
    name: str,
    path: str,
    *args: str,
    before: Optional[List[str]] = None,
    after: Optional[List[str]] = None,
    env: Optional[Dict[str, str]] = None,
    description: Optional[str] = None,
    restart: Optional[str] = None,
    stop: Optional[str] = None,
) -> UnitFile:
    """Create a validated service unit in one call."""
    b = UnitBuilder(name, UnitType.SERVICE).run(path, *args)
    b.before(*(before or []))
    b.after(*(after or []))
    b.with_env(**(env or {}))
    if description is not None:
        b.describe(description)
    if restart is not None:
        b.on_restart(restart)
    if stop is not None:
        b.on_stop(stop)
    return b.build()


def target(
    name: str,
    path: str,
    *args: str,
    before: Optional[List[str]] = None,
    after: Optional[List[str]] = None,
    env: Optional[Dict[str, str]] = None,
    description: Optional[str] = None,
    once: bool = False,
) -> UnitFile:
    """Create a validated target unit in one call."""
    b = UnitBuilder(name, UnitType.TARGET).run(path, *args).once(once)
    b.before(*(before or []))
    b.after(*(after or []))
    b.with_env(**(env or {}))
    if description is not None:
        b.describe(description)
    return b.build()
