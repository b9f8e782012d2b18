from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import AnyUrl, IPvAnyAddress, TypeAdapter, ValidationError

from .schema import RootConfig
from .utils import get_path, split_path

Check = Callable[[Any], Optional[str]]

_URL_ADAPTER = TypeAdapter(AnyUrl)
_IP_ADAPTER = TypeAdapter(IPvAnyAddress)
_EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
)

PORT_MIN = 1
PORT_MAX = 65535


@dataclass(frozen=True)
class Violation:
    path: str
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def _is_zero(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value == () or value == []


def required(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if _is_zero(value):
        return "is required"
    return None


def url(value: Any) -> Optional[str]:
    """Absolute URL with a host. Host-less forms such as ``file:///x`` are rejected."""
    try:
        parsed = _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return f"must be a valid URL, got {value!r}"
    if not parsed.host:
        return f"must be a valid URL, got {value!r}"
    return None


def ip(value: Any) -> Optional[str]:
    try:
        _IP_ADAPTER.validate_python(value)
    except ValidationError:
        return f"must be a valid IP address, got {value!r}"
    return None


def email(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not _EMAIL_PATTERN.fullmatch(value):
        return f"must be a valid email address, got {value!r}"
    return None


def port(value: Any) -> Optional[str]:
    if not PORT_MIN <= value <= PORT_MAX:
        return f"must be between {PORT_MIN} and {PORT_MAX}, got {value}"
    return None


def each_url(values: Iterable[Any]) -> Optional[str]:
    for index, value in enumerate(values):
        problem = url(value)
        if problem:
            return f"[{index}] {problem}"
    return None


# Field path -> checks, evaluated in order; the first failing check wins.
RULES: Tuple[Tuple[str, Tuple[Check, ...]], ...] = (
    ("site.name", (required,)),
    ("site.url", (required, url)),
    ("site.api_url", (required, url)),
    ("server.host", (required, ip)),
    ("server.port", (required, port)),
    ("swagger.path", (required,)),
    ("stripe.secret_key", (required,)),
    ("stripe.webhook.secret", (required,)),
    ("maxmind.geolite2.country", (required, url)),
    ("sentry.dsn", (required,)),
    ("emails", (required,)),
    ("cors.origins", (required, each_url)),
    ("database.mongodb.uri", (required,)),
    ("database.mongodb.db_name", (required,)),
    ("database.badger.dir", (required,)),
    ("oauth.google.client_id", (required,)),
    ("oauth.google.client_secret", (required,)),
    ("oauth.google.redirect_url", (required, url)),
    ("oauth.github.client_id", (required,)),
    ("oauth.github.client_secret", (required,)),
    ("oauth.github.redirect_url", (required, url)),
)

# Applied to every element of ``emails``.
EMAIL_RULES: Tuple[Tuple[str, Tuple[Check, ...]], ...] = (
    ("nickname", (required,)),
    ("smtp.name", (required,)),
    ("smtp.from", (required, email)),
    ("smtp.username", (required, email)),
    ("smtp.password", (required,)),
    ("smtp.host", (required,)),
    ("smtp.port", (required, port)),
)


def _apply(
    data: Mapping[str, Any],
    rules: Iterable[Tuple[str, Tuple[Check, ...]]],
    prefix: str = "",
) -> List[Violation]:
    violations: List[Violation] = []
    for path, checks in rules:
        value = get_path(data, split_path(path))
        for check in checks:
            problem = check(value)
            if problem:
                violations.append(Violation(prefix + path, check.__name__, problem))
                break
    return violations


def validate_config(config: RootConfig) -> List[Violation]:
    """Evaluate every rule against ``config`` and return all violations."""
    data: Dict[str, Any] = config.model_dump(by_alias=True)
    violations = _apply(data, RULES)
    for index, profile in enumerate(data.get("emails") or ()):
        violations.extend(_apply(profile, EMAIL_RULES, prefix=f"emails.{index}."))
    return violations
