from pathlib import Path

import pytest

from initorder.errors import (
    InvalidExtension,
    LoadFailure,
    MissingDependency,
    UnitDirectoryError,
    UnitParseError,
    UnitReadError,
    UnitValidationError,
    UnsupportedUnitType,
)
from initorder.loader import load_unit, load_units, unit_type_for
from initorder.model import UnitType
from initorder.plan import load_and_resolve, resolve_directory


def test_unit_type_for_extension():
    assert unit_type_for("a/b/net.service") is UnitType.SERVICE
    assert unit_type_for("boot.TARGET") is UnitType.TARGET
    with pytest.raises(InvalidExtension):
        unit_type_for("README")
    with pytest.raises(UnsupportedUnitType) as exc:
        unit_type_for("notes.txt")
    assert exc.value.extension == "txt"


def test_load_service_unit(write_service):
    path = write_service("network", before=["web"])
    unit = load_unit(path)
    assert unit.name == "network"
    assert unit.unit_type is UnitType.SERVICE
    assert unit.dependency.needs_before == ("web",)


def test_load_target_unit(write_target):
    unit = load_unit(write_target("boot", once=True))
    assert unit.target.is_runnable_once is True


def test_type_must_match_extension(unit_dir: Path, write_service):
    path = write_service("net", filename="net.target")
    with pytest.raises(UnitValidationError) as exc:
        load_unit(path)
    assert exc.value.path == path
    assert any("does not match extension" in v for v in exc.value.violations)


def test_invalid_unit_reports_violations(unit_dir: Path):
    path = unit_dir / "bad.service"
    path.write_text(
        '[unit]\nname = ""\ntype = "service"\n[todo]\npath = ""\nargs = []\nenv = {}\n',
        encoding="utf-8",
    )
    with pytest.raises(UnitValidationError) as exc:
        load_unit(path)
    assert exc.value.violations == [
        "Unit name cannot be empty",
        "Todo path cannot be empty",
        "Service unit requires [service] section",
    ]


def test_malformed_toml(unit_dir: Path):
    path = unit_dir / "broken.service"
    path.write_text("[unit\nname = ", encoding="utf-8")
    with pytest.raises(UnitParseError) as exc:
        load_unit(path)
    assert exc.value.path == path


def test_document_missing_tables_is_a_parse_error(unit_dir: Path):
    path = unit_dir / "empty.service"
    path.write_text('[unit]\nname = "x"\ntype = "service"\n', encoding="utf-8")
    with pytest.raises(UnitParseError, match="missing \\[todo\\] table"):
        load_unit(path)


def test_unreadable_file(unit_dir: Path):
    with pytest.raises(UnitReadError):
        load_unit(unit_dir / "absent.service")


def test_load_units_skips_bad_files(unit_dir: Path, write_service, write_target):
    write_service("b")
    write_target("a")
    (unit_dir / "README.md").write_text("not a unit", encoding="utf-8")
    (unit_dir / "broken.service").write_text("[[[", encoding="utf-8")
    (unit_dir / "nested").mkdir()

    report = load_units(unit_dir)

    assert [u.name for u in report.units] == ["a", "b"]  # name order: a.target, b.service
    skipped = {s.path.name: s.error for s in report.skipped}
    assert set(skipped) == {"README.md", "broken.service"}
    assert isinstance(skipped["README.md"], UnsupportedUnitType)
    assert isinstance(skipped["broken.service"], UnitParseError)


def test_load_units_strict_raises_first_error(unit_dir: Path, write_service):
    write_service("ok")
    (unit_dir / "a-broken.service").write_text("[[[", encoding="utf-8")
    with pytest.raises(UnitParseError):
        load_units(unit_dir, strict=True)


def test_load_units_missing_directory(tmp_path: Path):
    with pytest.raises(UnitDirectoryError) as exc:
        load_units(tmp_path / "nope")
    assert exc.value.path == tmp_path / "nope"


def test_load_and_resolve_orders_directory(unit_dir: Path, write_service, write_target):
    write_target("multi-user", after=["web"])
    write_service("web", after=["network"])
    write_service("network")

    order = load_and_resolve(unit_dir)
    assert [u.name for u in order] == ["network", "web", "multi-user"]


def test_resolve_directory_returns_skipped(unit_dir: Path, write_service):
    write_service("only")
    (unit_dir / "junk.conf").write_text("x", encoding="utf-8")

    res = resolve_directory(unit_dir)
    assert res.names == ["only"]
    assert [s.path.name for s in res.skipped] == ["junk.conf"]


def test_skipped_unit_turns_into_missing_dependency(unit_dir: Path, write_service):
    write_service("web", after=["db"])
    # db is declared with the wrong extension, so it never loads
    write_service("db", filename="db.target")

    with pytest.raises(LoadFailure) as exc:
        load_and_resolve(unit_dir)
    assert exc.value.error == MissingDependency("web", "db")


def test_directory_errors_are_wrapped(tmp_path: Path):
    with pytest.raises(LoadFailure) as exc:
        resolve_directory(tmp_path / "nope")
    assert isinstance(exc.value.error, UnitDirectoryError)
    assert isinstance(exc.value.__cause__, UnitDirectoryError)


def test_bundled_example_units_resolve():
    root = Path(__file__).resolve().parent.parent / "examples" / "units"
    res = resolve_directory(root, strict=True)
    assert res.names == ["mounts", "network", "web", "multi-user"]
    assert res.skipped == []
