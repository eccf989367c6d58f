"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from scriptbay.core.audit_log import AuditLog, FileAuditLog
from scriptbay.core.batch_runner import BatchRunner
from scriptbay.core.catalog import ScriptCatalog
from scriptbay.core.clock import Clock, RealClock
from scriptbay.core.config import AppConfig, load_config, resolve_app_root
from scriptbay.core.confirmation import ConfirmationPort, InteractiveConfirmation
from scriptbay.core.executor import RealScriptExecutor, ScriptExecutor
from scriptbay.core.privileges import PrivilegeCheck, RealPrivilegeCheck


@dataclass(frozen=True)
class AppContext:
    """Immutable context holding all dependencies for scriptbay operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    config: AppConfig
    audit_log: AuditLog
    clock: Clock
    catalog: ScriptCatalog
    executor: ScriptExecutor
    runner: BatchRunner
    confirmation: ConfirmationPort
    privileges: PrivilegeCheck

    @staticmethod
    def for_test(
        config: AppConfig | None = None,
        audit_log: AuditLog | None = None,
        clock: Clock | None = None,
        executor: ScriptExecutor | None = None,
        confirmation: ConfirmationPort | None = None,
        privileges: PrivilegeCheck | None = None,
        root: Path | None = None,
    ) -> "AppContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            config: Optional AppConfig. If None, uses defaults rooted at root.
            audit_log: Optional AuditLog. If None, creates FakeAuditLog.
            clock: Optional Clock. If None, creates FakeClock.
            executor: Optional ScriptExecutor. If None, creates empty FakeScriptExecutor.
            confirmation: Optional ConfirmationPort. If None, accepts every question.
            privileges: Optional PrivilegeCheck. If None, reports an elevated process.
            root: App root used when config is None. If None, uses
                Path("/test/default/root") to prevent accidental use of real paths.

        Returns:
            AppContext configured with provided values and test defaults
        """
        from tests.fakes.audit_log import FakeAuditLog
        from tests.fakes.clock import FakeClock
        from tests.fakes.confirmation import FakeConfirmationPort
        from tests.fakes.executor import FakeScriptExecutor
        from tests.fakes.privileges import FakePrivilegeCheck

        if config is None:
            config = AppConfig.defaults(root or Path("/test/default/root"))
        if audit_log is None:
            audit_log = FakeAuditLog()
        if clock is None:
            clock = FakeClock()
        if executor is None:
            executor = FakeScriptExecutor()
        if confirmation is None:
            confirmation = FakeConfirmationPort()
        if privileges is None:
            privileges = FakePrivilegeCheck(elevated=True)

        return AppContext(
            config=config,
            audit_log=audit_log,
            clock=clock,
            catalog=ScriptCatalog(audit_log, config.script_extension),
            executor=executor,
            runner=BatchRunner(executor, audit_log, clock),
            confirmation=confirmation,
            privileges=privileges,
        )


def create_context(*, root: Path | None = None) -> AppContext:
    """Create production context with real implementations.

    Called once at CLI entry point to create the context for the entire
    command execution.

    Args:
        root: App root from --root; falls back to $SCRIPTBAY_ROOT, then cwd

    Returns:
        AppContext with real implementations and the session audit log open

    Raises:
        ConfigError: If scriptbay.toml exists but is invalid
    """
    config = load_config(resolve_app_root(root))
    clock = RealClock()
    audit_log = FileAuditLog(config.logs_dir, clock)
    executor = RealScriptExecutor(audit_log, config.interpreter)

    audit_log.log("scriptbay started.")
    return AppContext(
        config=config,
        audit_log=audit_log,
        clock=clock,
        catalog=ScriptCatalog(audit_log, config.script_extension),
        executor=executor,
        runner=BatchRunner(executor, audit_log, clock),
        confirmation=InteractiveConfirmation(),
        privileges=RealPrivilegeCheck(),
    )
