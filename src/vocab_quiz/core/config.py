"""TOML configuration helpers for vocab-quiz."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping

try:  # Python >= 3.11 ships ``tomllib`` in the stdlib.
    import tomllib
except ModuleNotFoundError as exc:  # pragma: no cover - interpreter guard
    raise RuntimeError("Python 3.11+ is required for tomllib support.") from exc

from . import workspace as workspace_mod
from .workspace import WorkspaceError

__all__ = [
    "CONFIG_FILENAME",
    "CONFIG_TEMPLATE",
    "DEFAULT_CONFIG",
    "QuizConfig",
    "TomlConfigError",
    "find_config_path",
    "load_config",
    "load_toml",
    "merge_defaults",
    "write_toml_template",
]

CONFIG_FILENAME = "quiz.toml"

DEFAULT_CONFIG: Mapping[str, Any] = {
    "quiz": {
        "mode": "term-to-meaning",
        "input_mode": "choice",
        "question_count": 10,
        "noise_scale": 0.2,
    },
    "logging": {
        "level": "INFO",
        "verbose": False,
    },
}

CONFIG_TEMPLATE = (
    "# vocab-quiz configuration\n\n"
    "[quiz]\n"
    '# "term-to-meaning" asks for the meaning of a term,\n'
    '# "meaning-to-term" asks for the term of a meaning.\n'
    'mode = "term-to-meaning"\n'
    '# "choice" (multiple choice) or "recall" (self-rated)\n'
    'input_mode = "choice"\n'
    "question_count = 10\n"
    "# Upper bound of the random jitter added to review priorities\n"
    "noise_scale = 0.2\n\n"
    "[logging]\n"
    'level = "INFO"\n'
    "verbose = false\n"
)


class TomlConfigError(RuntimeError):
    """Raised when TOML config IO or validation fails."""


@dataclass(frozen=True)
class QuizConfig:
    """Validated settings for a quiz run."""

    mode: str = "term-to-meaning"
    input_mode: str = "choice"
    question_count: int = 10
    noise_scale: float = 0.2
    log_level: str = "INFO"
    verbose: bool = False
    source: Path | None = None

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], *, source: Path | None = None
    ) -> "QuizConfig":
        quiz = data.get("quiz", {})
        logging_cfg = data.get("logging", {})
        mode = str(quiz.get("mode", cls.mode))
        if mode not in {"term-to-meaning", "meaning-to-term"}:
            raise TomlConfigError(f"Unsupported quiz mode '{mode}'.")
        input_mode = str(quiz.get("input_mode", cls.input_mode))
        if input_mode not in {"choice", "recall"}:
            raise TomlConfigError(f"Unsupported input mode '{input_mode}'.")
        try:
            count = int(quiz.get("question_count", cls.question_count))
            noise = float(quiz.get("noise_scale", cls.noise_scale))
        except (TypeError, ValueError) as exc:
            raise TomlConfigError(f"Invalid [quiz] value: {exc}") from exc
        if count < 0:
            raise TomlConfigError("quiz.question_count must be >= 0.")
        if noise < 0:
            raise TomlConfigError("quiz.noise_scale must be >= 0.")
        return cls(
            mode=mode,
            input_mode=input_mode,
            question_count=count,
            noise_scale=noise,
            log_level=str(logging_cfg.get("level", cls.log_level)),
            verbose=bool(logging_cfg.get("verbose", cls.verbose)),
            source=source,
        )


def load_toml(path: Path) -> Mapping[str, Any]:
    """Load a TOML document from ``path``.

    Errors are surfaced as :class:`TomlConfigError` instances so callers can
    translate them into exit codes.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise TomlConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise TomlConfigError(f"Failed to parse config TOML: {exc}") from exc


def merge_defaults(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    path: str = "",
) -> None:
    """Recursively merge ``override`` into ``base`` enforcing known keys."""

    for key, value in override.items():
        dotted = f"{path}{key}"
        if key not in base:
            raise TomlConfigError(f"Unknown configuration key '{dotted}'.")
        base_value = base[key]
        if isinstance(base_value, MutableMapping):
            if not isinstance(value, Mapping):
                raise TomlConfigError(
                    "Expected table for '{0}', found {1}.".format(
                        dotted,
                        type(value).__name__,
                    )
                )
            merge_defaults(base_value, value, path=f"{dotted}.")
            continue
        base[key] = value


def write_toml_template(
    path: Path,
    *,
    template: str = CONFIG_TEMPLATE,
    overwrite: bool = False,
    mode: int = 0o600,
) -> Path:
    """Write ``template`` to ``path`` honouring ``overwrite`` semantics."""

    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and not overwrite:
        raise TomlConfigError(f"Config already exists: {path}")
    with path.open("w", encoding="utf-8") as handle:
        handle.write(template)
    try:
        path.chmod(mode)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return path


def find_config_path(
    explicit: str | Path | None = None,
    *,
    workspace_path: Path | None = None,
) -> Path | None:
    """Locate ``quiz.toml``: explicit path, workspace config dir, then cwd.

    Returns ``None`` when no file exists so callers fall back to defaults.
    An explicit path that does not exist is an error.
    """

    if explicit:
        path = Path(explicit).expanduser().resolve()
        if not path.exists():
            raise TomlConfigError(f"Config file not found: {path}")
        return path

    try:
        layout = workspace_mod.ensure_workspace(
            path=workspace_path, create=False
        )
    except WorkspaceError as exc:
        raise TomlConfigError(str(exc)) from exc

    candidate = layout.path_for("config") / CONFIG_FILENAME
    if candidate.exists():
        return candidate.resolve()

    cwd_cfg = Path.cwd() / CONFIG_FILENAME
    if cwd_cfg.exists():
        return cwd_cfg.resolve()
    return None


def load_config(path: Path | None = None) -> QuizConfig:
    """Return defaults merged with the TOML document at ``path`` (if any)."""

    data = copy.deepcopy(dict(DEFAULT_CONFIG))
    if path is not None:
        merge_defaults(data, load_toml(path))
    return QuizConfig.from_mapping(data, source=path)
