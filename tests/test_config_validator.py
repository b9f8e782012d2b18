import pytest

from auth5.config import ConfigValidationError, RootConfig, load_config, validate_config
from auth5.config.validator import EMAIL_RULES, RULES, email, ip, url

from conftest import delete_dotted, set_dotted

REQUIRED_PATHS = [path for path, _ in RULES] + [f"emails.0.{path}" for path, _ in EMAIL_RULES]


def _violation_paths(write_config, data):
    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(write_config(data), environ={})
    return [v.path for v in exc_info.value.violations]


def test_valid_config_has_no_violations(valid_config):
    assert validate_config(RootConfig.model_validate(valid_config)) == []


@pytest.mark.parametrize("dotted", REQUIRED_PATHS)
def test_omitting_required_field_is_fatal(write_config, valid_config, dotted):
    delete_dotted(valid_config, dotted)

    paths = _violation_paths(write_config, valid_config)

    assert paths == [dotted]


def test_swagger_web_flag_is_optional(write_config, valid_config):
    del valid_config["swagger"]["web"]

    cfg = load_config(write_config(valid_config), environ={}).config

    assert cfg.swagger.web is False


def test_empty_emails_list_is_fatal(write_config, valid_config):
    valid_config["emails"] = []

    assert _violation_paths(write_config, valid_config) == ["emails"]


def test_empty_cors_origins_is_fatal(write_config, valid_config):
    valid_config["cors"]["origins"] = []

    assert _violation_paths(write_config, valid_config) == ["cors.origins"]


def test_every_cors_origin_must_be_a_url(write_config, valid_config):
    valid_config["cors"]["origins"].append("localhost")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(write_config(valid_config), environ={})

    violation = exc_info.value.violations[0]
    assert violation.path == "cors.origins"
    assert violation.message.startswith("[2]")


@pytest.mark.parametrize(
    "dotted",
    [
        "site.url",
        "site.api_url",
        "maxmind.geolite2.country",
        "oauth.google.redirect_url",
        "oauth.github.redirect_url",
    ],
)
def test_url_fields_reject_non_urls(write_config, valid_config, dotted):
    set_dotted(valid_config, dotted, "not a url")

    assert _violation_paths(write_config, valid_config) == [dotted]


def test_server_host_rejects_non_ip(write_config, valid_config):
    valid_config["server"]["host"] = "not-an-ip"

    assert _violation_paths(write_config, valid_config) == ["server.host"]


def test_server_host_accepts_ipv6(write_config, valid_config):
    valid_config["server"]["host"] = "::1"

    assert load_config(write_config(valid_config), environ={}).config.server.host == "::1"


@pytest.mark.parametrize("value", [0, 65536, -1])
def test_server_port_out_of_range_is_fatal(write_config, valid_config, value):
    valid_config["server"]["port"] = value

    assert _violation_paths(write_config, valid_config) == ["server.port"]


@pytest.mark.parametrize("value", [1, 65535])
def test_server_port_bounds_are_inclusive(write_config, valid_config, value):
    valid_config["server"]["port"] = value

    assert load_config(write_config(valid_config), environ={}).config.server.port == value


@pytest.mark.parametrize("value", [0, 70000])
def test_mail_port_out_of_range_is_fatal(write_config, valid_config, value):
    valid_config["emails"][1]["smtp"]["port"] = value

    assert _violation_paths(write_config, valid_config) == ["emails.1.smtp.port"]


@pytest.mark.parametrize("field", ["from", "username"])
def test_mail_addresses_must_be_emails(write_config, valid_config, field):
    valid_config["emails"][0]["smtp"][field] = "no-reply"

    assert _violation_paths(write_config, valid_config) == [f"emails.0.smtp.{field}"]


def test_all_violations_are_reported(write_config, valid_config):
    valid_config["server"]["host"] = "not-an-ip"
    valid_config["server"]["port"] = 0
    valid_config["site"]["url"] = "not a url"
    del valid_config["emails"][1]["nickname"]

    paths = _violation_paths(write_config, valid_config)

    assert paths == ["site.url", "server.host", "server.port", "emails.1.nickname"]


def test_first_failing_check_wins_per_field(write_config, valid_config):
    valid_config["site"]["url"] = ""

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(write_config(valid_config), environ={})

    assert exc_info.value.violations[0].rule == "required"
    assert "site.url" in str(exc_info.value)


def test_predicates():
    assert url("https://example.com/cb") is None
    assert url("mongodb://localhost:27017") is None
    assert url("example.com") is not None
    assert url("file:///etc/auth5") is not None
    assert ip("192.168.0.1") is None
    assert ip("256.0.0.1") is not None
    assert email("a.b+tag@example.co.uk") is None
    assert email("a@b@c") is not None
    assert email("a@example.com\n") is not None
    assert email("a@example.com\r\nBcc: x@example.com") is not None
