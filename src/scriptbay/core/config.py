"""Application configuration loading and saving.

Settings come from an optional ``scriptbay.toml`` in the app root. Relative
paths in the file are resolved against the app root. Missing keys fall back
to defaults.

Example config:
  scripts_dir = "scripts"
  logs_dir = "logs"
  script_extension = ".ps1"
  interpreter = ["pwsh", "-NoProfile", "-ExecutionPolicy", "Bypass", "-File"]
  confirm_runs = true
  warn_if_not_admin = true
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit

from scriptbay.core.executor import default_interpreter

CONFIG_FILE_NAME = "scriptbay.toml"
ROOT_ENV_VAR = "SCRIPTBAY_ROOT"
DEFAULT_SCRIPT_EXTENSION = ".ps1"


class ConfigError(ValueError):
    """The configuration file is unreadable or holds a value of the wrong type."""


@dataclass(frozen=True)
class AppConfig:
    """Immutable application configuration.

    Loaded once at CLI entry point and stored in AppContext.
    """

    root: Path
    scripts_dir: Path
    logs_dir: Path
    script_extension: str
    interpreter: tuple[str, ...]
    confirm_runs: bool
    warn_if_not_admin: bool

    @staticmethod
    def defaults(root: Path) -> "AppConfig":
        return AppConfig(
            root=root,
            scripts_dir=root / "scripts",
            logs_dir=root / "logs",
            script_extension=DEFAULT_SCRIPT_EXTENSION,
            interpreter=default_interpreter(),
            confirm_runs=True,
            warn_if_not_admin=True,
        )


def resolve_app_root(explicit: Path | None) -> Path:
    """Pick the app root: explicit option, then $SCRIPTBAY_ROOT, then cwd."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    from_env = os.environ.get(ROOT_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser().resolve()
    return Path.cwd()


def normalize_extension(extension: str) -> str:
    extension = extension.strip()
    if not extension.startswith("."):
        extension = f".{extension}"
    return extension.lower()


def _expect(data: dict[str, Any], key: str, kind: type, cfg_path: Path) -> Any:
    value = data[key]
    if not isinstance(value, kind):
        raise ConfigError(f"'{key}' in {cfg_path} must be a {kind.__name__}, got {value!r}")
    return value


def load_config(root: Path) -> AppConfig:
    """Load scriptbay.toml from root if present; otherwise return defaults.

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    config = AppConfig.defaults(root)
    cfg_path = root / CONFIG_FILE_NAME
    if not cfg_path.exists():
        return config

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read {cfg_path}: {e}") from e

    scripts_dir = config.scripts_dir
    if "scripts_dir" in data:
        scripts_dir = root / Path(_expect(data, "scripts_dir", str, cfg_path)).expanduser()

    logs_dir = config.logs_dir
    if "logs_dir" in data:
        logs_dir = root / Path(_expect(data, "logs_dir", str, cfg_path)).expanduser()

    extension = config.script_extension
    if "script_extension" in data:
        extension = normalize_extension(_expect(data, "script_extension", str, cfg_path))

    interpreter = config.interpreter
    if "interpreter" in data:
        raw = _expect(data, "interpreter", list, cfg_path)
        if not raw or not all(isinstance(arg, str) for arg in raw):
            raise ConfigError(f"'interpreter' in {cfg_path} must be a non-empty list of strings")
        interpreter = tuple(raw)

    confirm_runs = config.confirm_runs
    if "confirm_runs" in data:
        confirm_runs = _expect(data, "confirm_runs", bool, cfg_path)

    warn_if_not_admin = config.warn_if_not_admin
    if "warn_if_not_admin" in data:
        warn_if_not_admin = _expect(data, "warn_if_not_admin", bool, cfg_path)

    return AppConfig(
        root=root,
        scripts_dir=scripts_dir,
        logs_dir=logs_dir,
        script_extension=extension,
        interpreter=interpreter,
        confirm_runs=confirm_runs,
        warn_if_not_admin=warn_if_not_admin,
    )


def _relative_to_root(path: Path, root: Path) -> str:
    if path.is_relative_to(root):
        return path.relative_to(root).as_posix()
    return str(path)


def save_config(config: AppConfig) -> Path:
    """Write config to ``<root>/scriptbay.toml`` and return the file path.

    Uses tomlkit so the header comment survives later hand edits.
    """
    config.root.mkdir(parents=True, exist_ok=True)
    cfg_path = config.root / CONFIG_FILE_NAME

    doc = tomlkit.document()
    doc.add(tomlkit.comment("scriptbay configuration. Relative paths resolve against this folder."))
    doc.add(tomlkit.nl())
    doc["scripts_dir"] = _relative_to_root(config.scripts_dir, config.root)
    doc["logs_dir"] = _relative_to_root(config.logs_dir, config.root)
    doc["script_extension"] = config.script_extension
    doc["interpreter"] = list(config.interpreter)
    doc["confirm_runs"] = config.confirm_runs
    doc["warn_if_not_admin"] = config.warn_if_not_admin

    cfg_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return cfg_path
