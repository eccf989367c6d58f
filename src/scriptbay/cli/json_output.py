"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from collections.abc import Callable
from functools import wraps
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from scriptbay.cli.output import machine_output


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "ScriptNameError")
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    exit_code: int = Field(default=1, ge=0, le=255)


class EntryModel(BaseModel):
    name: str
    qualified_name: str
    path: str
    has_undo: bool


class CategoryModel(BaseModel):
    name: str
    entries: list[EntryModel]


class CatalogResponse(BaseModel):
    scripts_dir: str
    categories: list[CategoryModel]


class ScriptRunModel(BaseModel):
    name: str
    path: str
    exit_code: int
    output: str


class BatchResponse(BaseModel):
    """JSON document describing a finished batch."""

    status: str
    succeeded: bool
    cancelled: bool
    total: int
    completed: int
    duration_seconds: float = Field(ge=0)
    results: list[ScriptRunModel]


class NoBatchResponse(BaseModel):
    """JSON document for a command that ended without running a batch.

    Attributes:
        status: One of "no_selection", "nothing_to_undo" or "aborted"
        message: The message shown to the user
    """

    status: str
    message: str


def emit_json(model: BaseModel) -> None:
    """Output a pydantic model as indented JSON on stdout."""
    machine_output(json.dumps(model.model_dump(mode="json"), indent=2))


def emit_json_error(error: str, error_type: str, exit_code: int = 1) -> None:
    """Output error as JSON and exit.

    Raises:
        SystemExit: Always raises to terminate with specified exit code
    """
    emit_json(ErrorResponse(error=error, error_type=error_type, exit_code=exit_code))
    raise SystemExit(exit_code)


def json_error_boundary(func: Callable) -> Callable:
    """Decorator to catch exceptions and emit JSON errors when in JSON mode.

    Inspects function kwargs for 'output_format' parameter. If it is "json",
    catches exceptions and outputs structured JSON errors. Otherwise,
    lets exceptions bubble up for normal error handling.

    Example:
        @click.command()
        @click.option("--format", "output_format", type=click.Choice(["text", "json"]))
        @json_error_boundary
        def my_command(output_format: str) -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except Exception as e:
            if kwargs.get("output_format", "text") == "json":
                emit_json_error(str(e), type(e).__name__, exit_code=1)
            raise

    return wrapper
