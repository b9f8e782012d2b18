from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import yaml

from .validator import Violation

REDACTED = "***"
SENSITIVE_KEYS = ("secret", "password", "dsn", "uri")


def format_violations(violations: Sequence[Violation]) -> str:
    lines = [f"Configuration validation failed ({len(violations)}):"]
    lines.extend(f"  - {violation}" for violation in violations)
    return "\n".join(lines)


def format_diagnostics(path: str, overridden_keys: Iterable[str]) -> str:
    lines = ["Configuration diagnostics:", f"  - file: {path}"]
    overridden = list(overridden_keys)
    if not overridden:
        lines.append("  - environment overrides: none")
    else:
        lines.append(f"  - environment overrides ({len(overridden)}):")
        lines.extend([f"      * {key}" for key in overridden])
    return "\n".join(lines)


def redact(data: Any) -> Any:
    if isinstance(data, dict):
        result: Dict[str, Any] = {}
        for key, value in data.items():
            if any(marker in key.lower() for marker in SENSITIVE_KEYS) and value:
                result[key] = REDACTED
            else:
                result[key] = redact(value)
        return result
    if isinstance(data, list):
        return [redact(item) for item in data]
    return data


def format_summary(config: Dict[str, Any]) -> str:
    """Render the effective configuration as YAML with secrets masked."""
    return yaml.safe_dump(redact(config), sort_keys=False, default_flow_style=False)
