"""CLI tests for scriptbay run.

Script execution is faked with FakeScriptExecutor; the real executor is
covered in tests/integration/test_real_executor.py.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from scriptbay.cli.cli import cli
from scriptbay.cli.commands.run import (
    CONFIRM_RUN_ALL_PROMPT,
    CONFIRM_RUN_PROMPT,
    NOT_ADMIN_PROMPT,
)
from scriptbay.core.config import AppConfig
from scriptbay.core.context import AppContext
from scriptbay.core.executor import ExecutionResult
from tests.fakes.audit_log import FakeAuditLog
from tests.fakes.confirmation import FakeConfirmationPort
from tests.fakes.executor import FakeScriptExecutor
from tests.fakes.privileges import FakePrivilegeCheck
from tests.test_utils.script_tree import write_scripts


def _setup(tmp_path: Path) -> Path:
    scripts = tmp_path / "scripts"
    write_scripts(
        scripts,
        {
            "privacy": ["telemetry.ps1", "telemetry.undo.ps1"],
            "network": ["dns.ps1"],
        },
    )
    return scripts.resolve()


def test_run_named_scripts_in_catalog_order(tmp_path: Path) -> None:
    scripts = _setup(tmp_path)
    executor = FakeScriptExecutor(
        default_result=ExecutionResult(exit_code=0, combined_output="applied\n")
    )
    confirmation = FakeConfirmationPort()
    ctx = AppContext.for_test(
        config=AppConfig.defaults(tmp_path), executor=executor, confirmation=confirmation
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "dns", "privacy/telemetry"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert set(executor.executed) == {
        scripts / "privacy" / "telemetry.ps1",
        scripts / "network" / "dns.ps1",
    }
    assert confirmation.prompts == [CONFIRM_RUN_PROMPT]
    assert "Running: dns" in result.output
    assert "Running: telemetry" in result.output
    assert "applied" in result.output
    assert "--- Done" in result.output


def test_run_with_no_names_reports_no_selection(tmp_path: Path) -> None:
    _setup(tmp_path)
    executor = FakeScriptExecutor()
    ctx = AppContext.for_test(config=AppConfig.defaults(tmp_path), executor=executor)
    runner = CliRunner()

    result = runner.invoke(cli, ["run"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "No scripts selected." in result.output
    assert executor.executed == []


def test_run_unknown_name_fails(tmp_path: Path) -> None:
    _setup(tmp_path)
    executor = FakeScriptExecutor()
    ctx = AppContext.for_test(config=AppConfig.defaults(tmp_path), executor=executor)
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "nope"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: No script named 'nope'" in result.output
    assert executor.executed == []


def test_run_declined_confirmation_runs_nothing(tmp_path: Path) -> None:
    _setup(tmp_path)
    executor = FakeScriptExecutor()
    ctx = AppContext.for_test(
        config=AppConfig.defaults(tmp_path),
        executor=executor,
        confirmation=FakeConfirmationPort(answer=False),
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "dns"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Aborted." in result.output
    assert executor.executed == []


def test_run_warns_when_not_elevated(tmp_path: Path) -> None:
    _setup(tmp_path)
    executor = FakeScriptExecutor()
    confirmation = FakeConfirmationPort(answers=[False])
    ctx = AppContext.for_test(
        config=AppConfig.defaults(tmp_path),
        executor=executor,
        confirmation=confirmation,
        privileges=FakePrivilegeCheck(elevated=False),
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "dns"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert confirmation.prompts == [NOT_ADMIN_PROMPT]
    assert executor.executed == []


def test_run_yes_skips_prompts(tmp_path: Path) -> None:
    _setup(tmp_path)
    executor = FakeScriptExecutor()
    confirmation = FakeConfirmationPort(answer=False)
    ctx = AppContext.for_test(
        config=AppConfig.defaults(tmp_path),
        executor=executor,
        confirmation=confirmation,
        privileges=FakePrivilegeCheck(elevated=False),
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--yes", "dns"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert confirmation.prompts == []
    assert len(executor.executed) == 1


def test_run_all_runs_every_entry(tmp_path: Path) -> None:
    scripts = _setup(tmp_path)
    executor = FakeScriptExecutor()
    confirmation = FakeConfirmationPort()
    ctx = AppContext.for_test(
        config=AppConfig.defaults(tmp_path), executor=executor, confirmation=confirmation
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--all"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert confirmation.prompts == [CONFIRM_RUN_ALL_PROMPT]
    assert set(executor.executed) == {
        scripts / "privacy" / "telemetry.ps1",
        scripts / "privacy" / "telemetry.undo.ps1",
        scripts / "network" / "dns.ps1",
    }


def test_run_all_rejects_names(tmp_path: Path) -> None:
    _setup(tmp_path)
    runner = CliRunner()

    result = runner.invoke(
        cli, ["run", "--all", "dns"], obj=AppContext.for_test(config=AppConfig.defaults(tmp_path))
    )

    assert result.exit_code == 1
    assert "--all cannot be combined with script names" in result.output


def test_run_failure_continues_and_exits_nonzero(tmp_path: Path) -> None:
    scripts = _setup(tmp_path)
    telemetry = scripts / "privacy" / "telemetry.ps1"
    dns = scripts / "network" / "dns.ps1"
    executor = FakeScriptExecutor(
        results={telemetry: ExecutionResult(exit_code=5, combined_output="broken\n")}
    )
    audit_log = FakeAuditLog()
    ctx = AppContext.for_test(
        config=AppConfig.defaults(tmp_path), executor=executor, audit_log=audit_log
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "telemetry", "dns"], obj=ctx)

    assert result.exit_code == 1
    assert set(executor.executed) == {telemetry, dns}
    assert "telemetry: exit code 5" in result.output
    assert f"Completed: {telemetry} - ExitCode 5" in audit_log.messages
    assert f"Completed: {dns} - ExitCode 0" in audit_log.messages


def test_run_json_output(tmp_path: Path) -> None:
    scripts = _setup(tmp_path)
    executor = FakeScriptExecutor(
        default_result=ExecutionResult(exit_code=0, combined_output="ok\n")
    )
    ctx = AppContext.for_test(config=AppConfig.defaults(tmp_path), executor=executor)
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--format", "json", "dns"], obj=ctx)

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["status"] == "Done"
    assert data["succeeded"] is True
    assert data["total"] == 1
    assert data["results"] == [
        {
            "name": "dns",
            "path": str(scripts / "network" / "dns.ps1"),
            "exit_code": 0,
            "output": "ok\n",
        }
    ]


def test_run_json_unknown_name_emits_error_document(tmp_path: Path) -> None:
    _setup(tmp_path)
    ctx = AppContext.for_test(config=AppConfig.defaults(tmp_path))
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--format", "json", "nope"], obj=ctx)

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data == {
        "error": "No script named 'nope'",
        "error_type": "ScriptNameError",
        "exit_code": 1,
    }


def test_run_without_confirm_runs_setting_skips_prompt(tmp_path: Path) -> None:
    _setup(tmp_path)
    config = AppConfig.defaults(tmp_path)
    config = AppConfig(
        root=config.root,
        scripts_dir=config.scripts_dir,
        logs_dir=config.logs_dir,
        script_extension=config.script_extension,
        interpreter=config.interpreter,
        confirm_runs=False,
        warn_if_not_admin=False,
    )
    executor = FakeScriptExecutor()
    confirmation = FakeConfirmationPort(answer=False)
    ctx = AppContext.for_test(
        config=config,
        executor=executor,
        confirmation=confirmation,
        privileges=FakePrivilegeCheck(elevated=False),
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "dns"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert confirmation.prompts == []
    assert len(executor.executed) == 1


def test_run_json_declined_confirmation_emits_status_document(tmp_path: Path) -> None:
    _setup(tmp_path)
    executor = FakeScriptExecutor()
    ctx = AppContext.for_test(
        config=AppConfig.defaults(tmp_path),
        executor=executor,
        confirmation=FakeConfirmationPort(answer=False),
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--format", "json", "dns"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"status": "aborted", "message": "Aborted."}
    assert executor.executed == []


def test_run_json_without_names_emits_status_document(tmp_path: Path) -> None:
    _setup(tmp_path)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["run", "--format", "json"],
        obj=AppContext.for_test(config=AppConfig.defaults(tmp_path)),
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "status": "no_selection",
        "message": "No scripts selected.",
    }
