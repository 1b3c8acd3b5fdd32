"""Tests for the composition-backup CLI.

Drives main() with a patched sys.argv and temporary request/config files.
"""

import json
import sys
from pathlib import Path

import pytest

from composition_backup.cli import _read_request, main
from composition_backup.resources.keys import (
    BACKUP_RESOURCE_NAME,
    EXCLUDE_FROM_BACKUP,
    INITIAL_BACKUP_CREATED,
    SCHEDULE_RESOURCE_NAME,
)


def _request(ready: str = "True") -> dict:
    return {
        "observed": {
            "composite": {
                "resource": {
                    "apiVersion": "example.org/v1alpha1",
                    "kind": "XDatabase",
                    "metadata": {"name": "db-1"},
                    "status": {"conditions": [{"type": "Ready", "status": ready}]},
                }
            }
        },
        "desired": {
            "resources": {
                "secret": {"resource": {"apiVersion": "v1", "kind": "Secret"}},
                "deploy": {"resource": {"apiVersion": "apps/v1", "kind": "Deployment"}},
                "config": {
                    "resource": {
                        "apiVersion": "v1",
                        "kind": "ConfigMap",
                        "metadata": {"annotations": {EXCLUDE_FROM_BACKUP: "true"}},
                    }
                },
            }
        },
    }


@pytest.fixture
def request_file(tmp_path: Path) -> Path:
    path = tmp_path / "request.json"
    path.write_text(json.dumps(_request()))
    return path


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["composition-backup", *argv])
    return main()


class TestReadRequest:
    """Request file parsing."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            _read_request(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{")

        with pytest.raises(ValueError, match="Invalid JSON"):
            _read_request(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(ValueError, match="must contain a JSON object"):
            _read_request(path)


class TestRender:
    """render command."""

    def test_json_output(self, monkeypatch, capsys, request_file: Path) -> None:
        code = _run(monkeypatch, "render", str(request_file), "--json")

        response = json.loads(capsys.readouterr().out)
        assert code == 0
        assert BACKUP_RESOURCE_NAME in response["desired"]["resources"]
        annotations = response["desired"]["composite"]["resource"]["metadata"]["annotations"]
        assert annotations[INITIAL_BACKUP_CREATED] == "true"

    def test_config_file_adds_schedule(self, monkeypatch, capsys, tmp_path: Path, request_file: Path) -> None:
        config = tmp_path / "backup.toml"
        config.write_text('[backup]\nschedule = "0 * * * *"\n')

        code = _run(monkeypatch, "render", str(request_file), "--config", str(config), "--json")

        response = json.loads(capsys.readouterr().out)
        assert code == 0
        assert SCHEDULE_RESOURCE_NAME in response["desired"]["resources"]

    def test_summary_output(self, monkeypatch, capsys, request_file: Path) -> None:
        code = _run(monkeypatch, "render", str(request_file))

        out = capsys.readouterr().out
        assert code == 0
        assert "TRIGGERED" in out
        assert "Deployment.apps" in out

    def test_skip_is_success(self, monkeypatch, capsys, tmp_path: Path) -> None:
        path = tmp_path / "request.json"
        path.write_text(json.dumps(_request(ready="False")))

        code = _run(monkeypatch, "render", str(path))

        assert code == 0
        assert "SKIPPED_NOT_READY" in capsys.readouterr().out

    def test_fatal_result_exits_1(self, monkeypatch, capsys, tmp_path: Path) -> None:
        request = _request()
        request["observed"]["composite"]["resource"]["metadata"]["name"] = ""
        path = tmp_path / "request.json"
        path.write_text(json.dumps(request))

        code = _run(monkeypatch, "render", str(path))

        assert code == 1
        assert "cannot synthesize backup declaration" in capsys.readouterr().out

    def test_missing_request_exits_1(self, monkeypatch, capsys, tmp_path: Path) -> None:
        code = _run(monkeypatch, "render", str(tmp_path / "missing.json"))

        assert code == 1
        assert "Request file not found" in capsys.readouterr().out

    def test_missing_config_exits_1(self, monkeypatch, capsys, tmp_path: Path, request_file: Path) -> None:
        code = _run(monkeypatch, "render", str(request_file), "--config", str(tmp_path / "nope.toml"))

        assert code == 1
        assert "Engine config not found" in capsys.readouterr().out


class TestClassify:
    """classify command."""

    def test_lists_kinds(self, monkeypatch, capsys, request_file: Path) -> None:
        code = _run(monkeypatch, "classify", str(request_file))

        out = capsys.readouterr().out
        assert code == 0
        assert "Secret." in out
        assert "Deployment.apps" in out
        assert "ConfigMap" not in out

    def test_no_eligible_resources(self, monkeypatch, capsys, tmp_path: Path) -> None:
        request = _request()
        request["desired"]["resources"] = {}
        path = tmp_path / "request.json"
        path.write_text(json.dumps(request))

        code = _run(monkeypatch, "classify", str(path))

        assert code == 0
        assert "No resources eligible" in capsys.readouterr().out


class TestArguments:
    """Argument parsing."""

    def test_command_required(self, monkeypatch) -> None:
        with pytest.raises(SystemExit):
            _run(monkeypatch)
