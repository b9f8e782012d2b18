"""
Environment overlay - map ``AUTH5_*`` variables onto the settings tree.
"""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, get_args, get_origin

from loguru import logger
from pydantic import BaseModel

from .schema import CONFIG_ENV_VAR, ENV_DELIMITER, ENV_PREFIX, RootConfig
from .utils import Path, join_path, set_path, split_path


def collect_overrides(
    environ: Optional[Mapping[str, str]] = None,
    prefix: str = ENV_PREFIX,
    delimiter: str = ENV_DELIMITER,
) -> Dict[Path, str]:
    """
    Collect prefixed environment variables as key paths.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)
        prefix: Variable name prefix, stripped from the key
        delimiter: Key path separator inside the variable name

    Returns:
        Mapping of key path to raw string value, in sorted variable order
    """
    source = os.environ if environ is None else environ
    overrides: Dict[Path, str] = {}
    for name in sorted(source):
        if not name.startswith(prefix) or name == CONFIG_ENV_VAR:
            continue
        path = split_path(name[len(prefix):], delimiter)
        if not path:
            continue
        overrides[path] = source[name]
    return overrides


def apply_overrides(
    tree: Mapping[str, Any],
    overrides: Mapping[Path, str],
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Overlay ``overrides`` on a copy of ``tree``.

    Returns:
        The merged tree and the dotted keys that were written
    """
    merged: Dict[str, Any] = deepcopy(dict(tree))
    written: List[str] = []
    for requested, value in overrides.items():
        path = model_key_path(requested)
        if path is None:
            logger.warning(
                f"Ignoring environment override {ENV_PREFIX}{join_path(requested)}: no such configuration key"
            )
            continue
        try:
            target = set_path(merged, path, value)
        except KeyError as e:
            logger.warning(f"Ignoring environment override {ENV_PREFIX}{join_path(requested)}: {e}")
            continue
        written.append(join_path(target))
    return merged, written


def _field_key(model: Type[BaseModel], segment: str) -> Optional[Tuple[str, Any]]:
    keys = {(field.alias or name): field.annotation for name, field in model.model_fields.items()}
    if segment in keys:
        return segment, keys[segment]
    folded = segment.lower()
    for key, annotation in keys.items():
        if key.lower() == folded:
            return key, annotation
    return None


def model_key_path(path: Path, model: Type[BaseModel] = RootConfig) -> Optional[Path]:
    """
    Spell ``path`` with the file keys ``model`` reads, ignoring case.

    Digit segments address elements of tuple fields. Returns ``None`` when
    the path names nothing the model consumes.
    """
    resolved: List[str] = []
    current: Any = model
    for segment in path:
        if get_origin(current) is tuple:
            if not segment.isdigit():
                return None
            resolved.append(segment)
            current = get_args(current)[0]
            continue
        if not (isinstance(current, type) and issubclass(current, BaseModel)):
            return None
        match = _field_key(current, segment)
        if match is None:
            return None
        key, current = match
        resolved.append(key)
    return tuple(resolved)
