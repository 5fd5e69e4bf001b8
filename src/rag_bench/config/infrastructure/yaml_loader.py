"""Loads rag-bench YAML config: env interpolation, validation and observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rag_bench.config.domain.config import BenchConfig
from rag_bench.config.domain.observer import ConfigObserver
from rag_bench.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from rag_bench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

# Above this many concurrent questions the judge fan-out gets noisy.
_PARALLELISM_WARNING_THRESHOLD = 8


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a BenchConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> BenchConfig:
        """
        Load, interpolate, validate, and return a BenchConfig from a YAML file.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: listing every unset ${ENV_VAR} reference.
            ConfigValidationError: if the schema is violated or a knowledge-base
                override names an empty id.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        interpolated = interpolate(raw)
        _check_knowledge_base_ids(interpolated=interpolated)
        cfg = _build_config(resolved=interpolated)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(
            name=cfg.name, knowledge_bases=len(cfg.knowledge_bases)
        )
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top-level mapping expected")
    return raw


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _check_knowledge_base_ids(interpolated: Any) -> None:
    """
    Reject blank knowledge-base ids, listing ALL of them before raising.

    Blank keys usually come from an env var that interpolated to "".
    """
    overrides: dict[str, Any] = interpolated.get("knowledge_bases", {}) or {}
    blank = [repr(key) for key in overrides if not str(key).strip()]
    if blank:
        raise ConfigValidationError(
            f"knowledge_bases contains blank id(s): {', '.join(blank)}"
        )


def _build_config(resolved: Any) -> BenchConfig:
    try:
        return BenchConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: BenchConfig, observer: ConfigObserver) -> None:
    if cfg.execution.parallelism > _PARALLELISM_WARNING_THRESHOLD:
        observer.config_parallelism_warning(cfg.execution.parallelism)
