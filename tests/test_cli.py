from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from monoguard import cli
from monoguard.check import BoundaryError, ErrorInfo, RejectionKind
from monoguard.core import Span
from monoguard.icons import FAIL, SUCCESS
from monoguard.logging import logger
from monoguard.parsing import parse_workspace_config


@pytest.fixture(autouse=True)
def reset_log_handlers():
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def workspace_config(example_workspace):
    return parse_workspace_config(example_workspace)


@pytest.fixture
def mock_check(mocker) -> Mock:
    mock = Mock(return_value=[])  # default to a return with no errors
    mocker.patch("monoguard.cli.check", mock)
    return mock


@pytest.fixture
def boundary_error() -> BoundaryError:
    return BoundaryError(
        file_path="libs/lib1/src/index.ts",
        line_number=3,
        import_mod_path="@acme/app1",
        error_info=ErrorInfo(
            kind=RejectionKind.IMPORT_OF_APPLICATION,
            message="imports of apps are forbidden",
            span=Span(start=40, length=34),
        ),
    )


def test_check_valid_workspace(capfd, example_workspace, workspace_config):
    with pytest.raises(SystemExit) as sys_exit:
        cli.monoguard_check(
            workspace_config=workspace_config, workspace_root=example_workspace
        )
    captured = capfd.readouterr()
    assert sys_exit.value.code == 0
    assert SUCCESS in captured.err
    assert "All module boundaries validated!" in captured.err


def test_check_with_error(
    capfd, example_workspace, workspace_config, mock_check, boundary_error
):
    mock_check.return_value = [boundary_error]
    with pytest.raises(SystemExit) as sys_exit:
        cli.monoguard_check(
            workspace_config=workspace_config, workspace_root=example_workspace
        )
    captured = capfd.readouterr()
    assert sys_exit.value.code == 1
    assert FAIL in captured.err
    assert "libs/lib1/src/index.ts[L3]" in captured.err
    assert "imports of apps are forbidden" in captured.err
    assert "All module boundaries validated!" not in captured.err


def test_check_json_output(
    capfd, example_workspace, workspace_config, mock_check, boundary_error
):
    mock_check.return_value = [boundary_error]
    with pytest.raises(SystemExit) as sys_exit:
        cli.monoguard_check(
            workspace_config=workspace_config,
            workspace_root=example_workspace,
            output_format="json",
        )
    captured = capfd.readouterr()
    assert sys_exit.value.code == 1
    assert json.loads(captured.out) == [
        {
            "file": "libs/lib1/src/index.ts",
            "line": 3,
            "import": "@acme/app1",
            "kind": "ImportOfApplication",
            "message": "imports of apps are forbidden",
            "span": {"start": 40, "length": 34},
        }
    ]


def test_check_sarif_output(
    monkeypatch,
    tmp_path,
    example_workspace,
    workspace_config,
    mock_check,
    boundary_error,
):
    monkeypatch.chdir(tmp_path)
    mock_check.return_value = [boundary_error]
    with pytest.raises(SystemExit) as sys_exit:
        cli.monoguard_check(
            workspace_config=workspace_config,
            workspace_root=example_workspace,
            output_format="sarif",
        )
    assert sys_exit.value.code == 1
    sarif = json.loads((tmp_path / "monoguard-check-results.sarif").read_text())
    [result] = sarif["runs"][0]["results"]
    assert result["ruleId"] == "ImportOfApplication"
    assert result["message"]["text"] == "imports of apps are forbidden"
    location = result["locations"][0]["physicalLocation"]
    assert location["artifactLocation"]["uri"] == "libs/lib1/src/index.ts"
    assert location["region"]["startLine"] == 3


def test_check_reports_setup_error(capfd, write_workspace):
    root = write_workspace(
        {
            "monoguard.toml": (
                'npm_scope = "acme"\n[[projects]]\nname = "lib1"\nroot = "libs/missing"\n'
            )
        }
    )
    with pytest.raises(SystemExit) as sys_exit:
        cli.monoguard_check(
            workspace_config=parse_workspace_config(root), workspace_root=root
        )
    captured = capfd.readouterr()
    assert sys_exit.value.code == 1
    assert "libs/missing" in captured.err


def test_main_check(capfd, monkeypatch, example_workspace):
    monkeypatch.chdir(example_workspace / "libs")
    with pytest.raises(SystemExit) as sys_exit:
        cli.main(["check", "--output", "json"])
    captured = capfd.readouterr()
    assert sys_exit.value.code == 0
    assert json.loads(captured.out) == []
    log_file = example_workspace / ".monoguard" / "monoguard.log"
    assert log_file.exists()
    log_record = json.loads(log_file.read_text().splitlines()[-1])
    assert log_record["call_info"]["function"] == "monoguard_check"


def test_main_without_config(capfd, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as sys_exit:
        cli.main(["check"])
    captured = capfd.readouterr()
    assert sys_exit.value.code == 1
    assert "not found" in captured.err


def test_main_exclude_extends_config(monkeypatch, example_workspace, mock_check):
    monkeypatch.chdir(example_workspace)
    with pytest.raises(SystemExit):
        cli.main(["check", "--exclude", "libs/lib2/**,generated"])
    workspace_config = mock_check.call_args.kwargs["workspace_config"]
    assert "libs/lib2/**" in workspace_config.exclude
    assert "generated" in workspace_config.exclude
    assert "node_modules" in workspace_config.exclude


def test_invalid_command(capfd):
    with pytest.raises(SystemExit) as sys_exit:
        cli.parse_arguments(["help"])
    captured = capfd.readouterr()
    assert sys_exit.value.code == 2
    assert "invalid choice: 'help'" in captured.err


def test_version(capfd):
    with pytest.raises(SystemExit) as sys_exit:
        cli.parse_arguments(["--version"])
    captured = capfd.readouterr()
    assert sys_exit.value.code == 0
    assert "monoguard" in captured.out
