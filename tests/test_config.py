import json
from pathlib import Path

import pytest

from nmsdash.config import DashboardSettings, load_settings
from nmsdash.core.domain.models import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "BASE_URL",
        "USERNAME",
        "PASSWORD",
        "TIMEOUT",
        "VERIFY_SSL",
        "DEFAULT_PAGE_SIZE",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(f"NMSDASH_{name}", raising=False)


def test_defaults_without_file() -> None:
    settings = load_settings()

    assert settings.base_url == "http://localhost:8980/opennms"
    assert settings.default_page_size == 10
    assert settings.log_level == "WARNING"


def test_yaml_file_is_loaded(tmp_path: Path) -> None:
    path = tmp_path / "nmsdash.yaml"
    path.write_text(
        "base_url: https://nms.example.com/opennms\n"
        "username: admin\n"
        "password: admin\n"
        "default_page_size: 25\n"
    )

    settings = load_settings(path)

    assert settings.base_url == "https://nms.example.com/opennms"
    assert settings.default_page_size == 25


def test_json_file_is_loaded(tmp_path: Path) -> None:
    path = tmp_path / "nmsdash.json"
    path.write_text(json.dumps({"timeout": 5, "verify_ssl": False}))

    settings = load_settings(str(path))

    assert settings.timeout == 5.0
    assert settings.verify_ssl is False


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "nmsdash.yml"
    path.write_text("base_url: http://from-file/opennms\n")
    monkeypatch.setenv("NMSDASH_BASE_URL", "http://from-env/opennms")

    settings = load_settings(path)

    assert settings.base_url == "http://from-env/opennms"


def test_empty_yaml_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert load_settings(path).default_page_size == 10


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml")


def test_unsupported_format_raises(tmp_path: Path) -> None:
    path = tmp_path / "nmsdash.ini"
    path.write_text("[nmsdash]\n")

    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_non_mapping_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "nmsdash.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_invalid_values_raise_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "nmsdash.json"
    path.write_text(json.dumps({"default_page_size": 0}))

    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_rest_client_config_uses_basic_auth_when_user_set() -> None:
    config = DashboardSettings(username="admin", password="pw", timeout=12).rest_client_config()

    assert config.auth_type == "basic"
    assert config.auth_credentials == {"username": "admin", "password": "pw"}
    assert config.timeout == 12


def test_rest_client_config_without_user_has_no_auth() -> None:
    config = DashboardSettings().rest_client_config()

    assert config.auth_type is None
    assert config.verify_ssl is True


def test_log_level_is_normalized(tmp_path: Path) -> None:
    path = tmp_path / "nmsdash.yaml"
    path.write_text("log_level: ' debug '\n")

    assert load_settings(path).log_level == "DEBUG"


def test_unknown_log_level_in_file_raises_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "nmsdash.yaml"
    path.write_text("log_level: CHATTY\n")

    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(path)

    assert "log_level" in str(exc_info.value)


def test_unknown_log_level_in_env_raises_configuration_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("NMSDASH_LOG_LEVEL", "verbose")

    with pytest.raises(ConfigurationError):
        load_settings()
