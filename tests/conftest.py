"""Shared pytest fixtures for initorder tests."""

from pathlib import Path

import pytest

from initorder.model import (
    DependencySection,
    ServiceSection,
    TargetSection,
    TodoSection,
    UnitFile,
    UnitSection,
    UnitType,
)


def make_unit(name, before=(), after=(), unit_type=UnitType.SERVICE, path="/bin/true"):
    """Build a UnitFile directly, bypassing validation.

    Args:
        name: Unit name
        before: Names this unit must precede
        after: Names this unit must follow
        unit_type: Service or target; the matching section is filled in
        path: Executable path

    Returns:
        UnitFile with the section required by `unit_type`
    """
    return UnitFile(
        unit=UnitSection(unit_name=name, unit_type=unit_type),
        todo=TodoSection(path=path),
        service=ServiceSection() if unit_type is UnitType.SERVICE else None,
        target=TargetSection() if unit_type is UnitType.TARGET else None,
        dependency=DependencySection(needs_before=tuple(before), needs_after=tuple(after)),
    )


def service_toml(name, before=(), after=(), path="/bin/true", extra=""):
    """Text of a minimal valid service unit file."""
    return (
        f'[unit]\nname = "{name}"\ntype = "service"\n\n'
        f'[todo]\npath = "{path}"\nargs = []\nenv = {{}}\n\n'
        f"[service]\n\n"
        f"[dependency]\nbefore = {list(before)!r}\nafter = {list(after)!r}\n"
        f"{extra}"
    ).replace("'", '"')


def target_toml(name, before=(), after=(), once=False):
    """Text of a minimal valid target unit file."""
    return (
        f'[unit]\nname = "{name}"\ntype = "target"\n\n'
        f'[todo]\npath = "/bin/true"\nargs = []\nenv = {{}}\n\n'
        f"[target]\nonce = {'true' if once else 'false'}\n\n"
        f"[dependency]\nbefore = {list(before)!r}\nafter = {list(after)!r}\n"
    ).replace("'", '"')


@pytest.fixture
def unit_dir(tmp_path: Path):
    """Empty directory to drop unit files into."""
    d = tmp_path / "units"
    d.mkdir()
    return d


@pytest.fixture
def make():
    """Fixture providing the make_unit helper function."""
    return make_unit


@pytest.fixture
def write_service(unit_dir: Path):
    """Write a service unit file into unit_dir and return its path."""
    def _write(name, before=(), after=(), filename=None):
        path = unit_dir / (filename or f"{name}.service")
        path.write_text(service_toml(name, before, after), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_target(unit_dir: Path):
    """Write a target unit file into unit_dir and return its path."""
    def _write(name, before=(), after=(), once=False, filename=None):
        path = unit_dir / (filename or f"{name}.target")
        path.write_text(target_toml(name, before, after, once), encoding="utf-8")
        return path
    return _write
