from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from copilot_agent_util.adapters.errors import ConfigError
from copilot_agent_util.domain.diagnostics import Diagnostic, FileLocation, Severity
from copilot_agent_util.domain.result import Result
from copilot_agent_util.domain.run_config import RunnerConfig

CONFIG_FILE_NAME = ".copilot-agent-util.yaml"
ENV_LOG_DIR = "COPILOT_AGENT_UTIL_LOG_DIR"
ENV_VERBOSE = "COPILOT_AGENT_UTIL_VERBOSE"

_TRUTHY = {"1", "true", "yes", "on"}


def schema_path() -> Path:
    return Path(__file__).resolve().parents[1] / "schemas" / "config.schema.v1.json"


def load_config_file(path: Path) -> dict[str, Any]:
    """Read and validate the YAML config file; a missing file is an empty config."""
    if not path.exists():
        return {}
    try:
        raw: object = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"could not read {path.name}: {e}", details={"path": str(path)}, cause=e)
    schema = json.loads(schema_path().read_text(encoding="utf-8"))
    try:
        jsonschema.validate(raw, schema)
    except jsonschema.ValidationError as e:
        raise ConfigError(
            f"invalid {path.name}: {e.message}",
            details={"path": str(path), "field": ".".join(str(p) for p in e.absolute_path)},
            hint=f"Allowed keys: {', '.join(sorted(schema['properties']))}",
            cause=e,
        )
    assert isinstance(raw, dict)
    return dict(raw)


def env_flag(value: str | None) -> bool | None:
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in _TRUTHY


def effective_verbose(cli_verbose: bool | None, env_verbose: bool | None, file_config: Mapping[str, Any]) -> bool:
    if cli_verbose is not None:
        return cli_verbose
    if env_verbose is not None:
        return env_verbose
    return bool(file_config.get("verbose", False))


def effective_log_dir(cli_log_dir: Path | None, env_log_dir: str | None, file_config: Mapping[str, Any]) -> Path | None:
    if cli_log_dir is not None:
        return cli_log_dir
    if env_log_dir:
        return Path(env_log_dir)
    raw = file_config.get("log_dir")
    return Path(str(raw)) if raw else None


def build_config(
    working_dir: Path,
    *,
    cli_log_dir: Path | None = None,
    cli_verbose: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> Result[RunnerConfig]:
    env = environ if environ is not None else {}
    config_path = working_dir / CONFIG_FILE_NAME
    try:
        file_config = load_config_file(config_path)
    except ConfigError as e:
        code = "CONFIG_SCHEMA_INVALID" if isinstance(e.cause, jsonschema.ValidationError) else "CONFIG_PARSE_FAILED"
        return Result(
            diagnostics=[
                Diagnostic(
                    code=code,
                    rule="config.file",
                    severity=Severity.ERROR,
                    message=e.message,
                    location=FileLocation(str(config_path)),
                    hint=e.hint,
                    details=e.details,
                )
            ]
        )
    config = RunnerConfig.for_directory(
        working_dir,
        log_dir=effective_log_dir(cli_log_dir, env.get(ENV_LOG_DIR), file_config),
        verbose=effective_verbose(cli_verbose, env_flag(env.get(ENV_VERBOSE)), file_config),
    )
    return Result(value=config)
