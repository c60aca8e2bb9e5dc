"""Core shared helpers for vocab-quiz."""

from __future__ import annotations

from .config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    QuizConfig,
    TomlConfigError,
    find_config_path,
    load_config,
    load_toml,
    merge_defaults,
    write_toml_template,
)
from .logging import LOGGER_NAME, JsonLogFormatter, configure_logger
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "QuizConfig",
    "TomlConfigError",
    "find_config_path",
    "load_config",
    "load_toml",
    "merge_defaults",
    "write_toml_template",
    "LOGGER_NAME",
    "JsonLogFormatter",
    "configure_logger",
    "WORKSPACE_ENV",
    "WorkspaceError",
    "WorkspaceLayout",
    "ensure_workspace",
]
