from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from .env import apply_overrides, collect_overrides
from .errors import ConfigFileError, ConfigUnmarshalError, ConfigValidationError
from .schema import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE, RootConfig
from .utils import join_path
from .validator import validate_config


@dataclass(frozen=True)
class LoadResult:
    config: RootConfig
    path: Path
    overridden_keys: List[str] = field(default_factory=list)


def resolve_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    source = os.environ if environ is None else environ
    return Path(source.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)


def read_settings_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as e:
        raise ConfigFileError(path, e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigFileError(path, str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(path, f"expected a mapping at top level, got {type(data).__name__}")
    return data


def load_config(
    path: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LoadResult:
    """Load, overlay, unmarshal and validate the settings file.

    Raises a ``ConfigError`` subclass on any fatal condition; the caller
    decides whether to terminate.
    """
    config_path = Path(path) if path is not None else resolve_config_path(environ)
    logger.info(f"Loading config file: {config_path}")

    tree = read_settings_file(config_path)

    overridden: List[str] = []
    try:
        overrides = collect_overrides(environ)
    except Exception as e:
        logger.error(f"Error loading environment variables: {e}")
    else:
        tree, overridden = apply_overrides(tree, overrides)
        if overridden:
            logger.debug(f"Environment overrides applied: {overridden}")

    try:
        config = RootConfig.model_validate(tree)
    except ValidationError as e:
        raise ConfigUnmarshalError(
            [(join_path(err["loc"]), err["msg"]) for err in e.errors()]
        ) from e

    violations = validate_config(config)
    if violations:
        raise ConfigValidationError(violations)

    return LoadResult(config=config, path=config_path, overridden_keys=overridden)
