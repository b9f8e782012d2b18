import os
import sys
from copy import deepcopy
from pathlib import Path

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from auth5.config import reset_config  # noqa: E402


VALID_CONFIG = {
    "site": {
        "name": "auth5",
        "url": "https://auth5.example.com",
        "api_url": "https://api.auth5.example.com",
    },
    "server": {"host": "127.0.0.1", "port": 8080},
    "swagger": {"web": True, "path": "/docs"},
    "stripe": {"secret_key": "sk_test_123", "webhook": {"secret": "whsec_123"}},
    "maxmind": {"geolite2": {"country": "https://download.maxmind.com/geolite2-country.tar.gz"}},
    "sentry": {"dsn": "https://public@sentry.example.com/1"},
    "emails": [
        {
            "nickname": "primary",
            "smtp": {
                "name": "auth5",
                "from": "no-reply@auth5.example.com",
                "username": "no-reply@auth5.example.com",
                "password": "hunter2",
                "host": "smtp.example.com",
                "port": 587,
                "tls": True,
            },
        },
        {
            "nickname": "alerts",
            "smtp": {
                "name": "auth5 alerts",
                "from": "alerts@auth5.example.com",
                "username": "alerts@auth5.example.com",
                "password": "hunter3",
                "host": "smtp-alerts.example.com",
                "port": 465,
                "tls": False,
            },
        },
    ],
    "cors": {"origins": ["https://auth5.example.com", "http://localhost:3000"]},
    "database": {
        "mongodb": {"uri": "mongodb://localhost:27017", "db_name": "auth5"},
        "badger": {"dir": "./data/badger"},
    },
    "oauth": {
        "google": {
            "client_id": "google-id",
            "client_secret": "google-secret",
            "redirect_url": "https://api.auth5.example.com/oauth/google/callback",
        },
        "github": {
            "client_id": "github-id",
            "client_secret": "github-secret",
            "redirect_url": "https://api.auth5.example.com/oauth/github/callback",
        },
    },
}


def set_dotted(data, dotted, value):
    parts = dotted.split(".")
    current = data
    for part in parts[:-1]:
        current = current[int(part)] if isinstance(current, list) else current[part]
    last = parts[-1]
    if isinstance(current, list):
        current[int(last)] = value
    else:
        current[last] = value


def delete_dotted(data, dotted):
    parts = dotted.split(".")
    current = data
    for part in parts[:-1]:
        current = current[int(part)] if isinstance(current, list) else current[part]
    del current[parts[-1]]


@pytest.fixture
def valid_config():
    return deepcopy(VALID_CONFIG)


@pytest.fixture
def write_config(tmp_path):
    def _write(data, name="auth5.yml"):
        path = tmp_path / name
        with path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(data, handle, sort_keys=False)
        return path

    return _write


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in list(os.environ):
        if name.startswith("AUTH5_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
