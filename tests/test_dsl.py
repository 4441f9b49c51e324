import pytest

from initorder.dag import resolve
from initorder.dsl import UnitBuilder, service, target
from initorder.errors import UnitValidationError
from initorder.model import UnitType


def test_builder_makes_service():
    unit = (
        UnitBuilder("web", UnitType.SERVICE)
        .describe("HTTP frontend")
        .run("/usr/bin/web", "--port", "80")
        .with_env(WORKERS=4)
        .after("network")
        .on_stop("/usr/bin/web --stop")
        .build()
    )
    assert unit.name == "web"
    assert unit.unit.description == "HTTP frontend"
    assert unit.todo.args == ("--port", "80")
    assert unit.todo.env == {"WORKERS": "4"}
    assert unit.dependency.needs_after == ("network",)
    assert unit.service.command_on_stop == "/usr/bin/web --stop"
    assert unit.service.command_on_restart is None
    assert unit.target is None


def test_builder_accepts_type_as_text():
    unit = UnitBuilder("boot", "Target").run("/bin/true").once().build()
    assert unit.unit_type is UnitType.TARGET
    assert unit.target.is_runnable_once is True
    assert unit.service is None


def test_builder_rejects_invalid_units():
    with pytest.raises(UnitValidationError) as exc:
        UnitBuilder("  ").before("").build()
    assert exc.value.path is None
    assert exc.value.violations == [
        "Unit name cannot be empty",
        "Todo path cannot be empty",
        "Dependency name cannot be empty",
    ]


def test_functional_helpers_resolve_together():
    units = [
        target("multi-user", "/bin/true", after=["web"], once=True),
        service("web", "/usr/bin/web", after=["network"], restart="/usr/bin/web -r"),
        service("network", "/usr/bin/netup", "--all", before=["web"], env={"MODE": "fast"}),
    ]
    assert [u.name for u in resolve(units)] == ["network", "web", "multi-user"]
    assert units[1].service.command_on_restart == "/usr/bin/web -r"
    assert units[2].todo.env == {"MODE": "fast"}
