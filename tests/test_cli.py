"""Tests for the portreg command line."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from portreg import __version__
from portreg.cli import app
from portreg.config import get_default_registry_path, get_registry_path
from portreg.registry import Assignment, BlockedPort, Registry

runner = CliRunner()


def _flat(output: str) -> str:
    """Collapse whitespace so rich line wrapping does not matter."""
    return " ".join(output.split())


@pytest.fixture
def invoke(registry_path):
    """Run a portreg command against the test registry."""

    def _invoke(*args, **kwargs):
        return runner.invoke(app, ["--registry", str(registry_path), *args], **kwargs)

    return _invoke


def test_version():
    """Test --version and the version command."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"portreg version {__version__}" in result.output


def test_init(invoke, registry_path):
    """Test init creates the registry file."""
    result = invoke("init")

    assert result.exit_code == 0
    assert "Initialized registry" in result.output
    assert Registry.load(registry_path).blocked_ports


def test_init_twice(invoke, registry_path):
    """Test second init fails."""
    invoke("init")
    result = invoke("init")

    assert result.exit_code == 1
    assert "already exists" in _flat(result.output)


def test_assign_specific_port(invoke, registry_path):
    """Test assigning a specific port."""
    result = invoke("assign", "--port", "4000", "-d", "frontend", "--path", "/src/app")

    assert result.exit_code == 0
    assert "Assigned port 4000 to frontend" in _flat(result.output)
    assert Registry.load(registry_path).list_assignments() == [
        Assignment(4000, "frontend", "/src/app")
    ]


def test_assign_next_available(invoke):
    """Test auto-assignment without --port."""
    result = invoke("assign", "-q")

    assert result.exit_code == 0
    assert result.output.strip() == "3100"

    result = invoke("assign")
    assert result.exit_code == 0
    assert "Assigned port 3101" in _flat(result.output)


def test_assign_defaults_path_to_cwd(invoke, registry_path, temp_dir, monkeypatch):
    """Test that the project path defaults to the working directory."""
    monkeypatch.chdir(temp_dir)

    result = invoke("assign", "-p", "4000")

    assert result.exit_code == 0
    [assignment] = Registry.load(registry_path).list_assignments()
    assert assignment.path == str(Path.cwd())


def test_assign_already_assigned(invoke):
    """Test the hint on a duplicate assignment."""
    invoke("assign", "-p", "4000", "-d", "first")
    result = invoke("assign", "-p", "4000", "-d", "second")

    assert result.exit_code == 1
    output = _flat(result.output)
    assert "already assigned to 'first'" in output
    assert "Use 'portreg list' to see all assignments" in output


def test_assign_blocked(invoke):
    """Test that blocked ports are refused."""
    invoke("init")
    result = invoke("assign", "-p", "5432")

    assert result.exit_code == 1
    assert "blocked" in _flat(result.output)


def test_assign_rejects_out_of_range_port(invoke):
    """Test port validation on the command line."""
    result = invoke("assign", "-p", "70000")

    assert result.exit_code == 2


def test_unassign(invoke, registry_path):
    """Test releasing a port."""
    invoke("assign", "-p", "4000")
    result = invoke("unassign", "4000")

    assert result.exit_code == 0
    assert "Unassigned port 4000" in result.output
    assert Registry.load(registry_path).list_assignments() == []


def test_unassign_not_assigned(invoke):
    """Test releasing a port that was never assigned."""
    result = invoke("unassign", "4000")

    assert result.exit_code == 1
    output = _flat(result.output)
    assert "port 4000 is not assigned" in output
    assert "portreg list" in output


def test_list_empty(invoke):
    """Test list on an empty registry."""
    result = invoke("list")

    assert result.exit_code == 0
    assert "No ports assigned" in result.output


def test_list_table(invoke):
    """Test table output."""
    invoke("assign", "-p", "4000", "-d", "api", "--path", "/p")

    result = invoke("list")

    assert result.exit_code == 0
    assert "4000" in result.output
    assert "api" in result.output


def test_list_json(invoke):
    """Test JSON output keeps insertion order and omits empty fields."""
    invoke("assign", "-p", "5000", "-d", "second", "--path", "/b")
    invoke("assign", "-p", "4000", "--path", "/a")

    result = invoke("list", "--format", "json")

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"port": 5000, "description": "second", "path": "/b"},
        {"port": 4000, "path": "/a"},
    ]


def test_list_json_with_blocked(invoke):
    """Test JSON output including blocked ports."""
    invoke("init")

    result = invoke("list", "--format", "json", "--blocked")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["assignments"] == []
    assert {"ports": "3306", "description": "MySQL default port"} in data["blockedPorts"]


def test_list_blocked_table(invoke):
    """Test blocked-port table output."""
    invoke("init")

    result = invoke("list", "--blocked")

    assert result.exit_code == 0
    assert "27017" in result.output


def test_list_unknown_format(invoke):
    """Test that an unknown format is a usage error."""
    result = invoke("list", "--format", "yaml")

    assert result.exit_code == 2


def test_list_corrupt_registry(invoke, registry_path):
    """Test that a corrupt registry file is reported."""
    registry_path.write_text("not json")

    result = invoke("list")

    assert result.exit_code == 1
    assert "failed to load registry" in _flat(result.output)


def test_list_deeply_nested_registry(invoke, registry_path):
    """Test that an unparseable registry is reported without a traceback."""
    registry_path.write_text("[" * 200000 + "]" * 200000)

    result = invoke("list")

    assert result.exit_code == 1
    assert "failed to load registry" in _flat(result.output)
    assert not isinstance(result.exception, RecursionError)


def test_check(invoke, registry_path):
    """Test availability checks."""
    Registry(
        registry_path,
        assignments=[Assignment(4000, "api")],
        blocked_ports=[BlockedPort("9000-9010")],
    ).save()

    result = invoke("check", "4001")
    assert result.exit_code == 0
    assert "available" in result.output

    result = invoke("check", "4000")
    assert result.exit_code == 1
    assert "assigned to api" in _flat(result.stderr)
    assert result.stdout == ""

    result = invoke("check", "9005")
    assert result.exit_code == 1
    assert "blocked" in result.stderr
    assert result.stdout == ""


def test_registry_from_environment(registry_path):
    """Test PORTREG_REGISTRY selects the registry file."""
    result = runner.invoke(
        app, ["assign", "-p", "4000"], env={"PORTREG_REGISTRY": str(registry_path)}
    )

    assert result.exit_code == 0
    assert [a.port for a in Registry.load(registry_path).list_assignments()] == [4000]


def test_default_registry_path(temp_dir, monkeypatch):
    """Test default path resolution."""
    monkeypatch.setenv("HOME", str(temp_dir))

    assert get_default_registry_path() == temp_dir / ".portreg.json"
    assert get_registry_path() == temp_dir / ".portreg.json"
    assert get_registry_path(Path("/x/y.json")) == Path("/x/y.json")
    assert get_registry_path(Path("~/y.json")) == temp_dir / "y.json"
