import logging

import pytest

from app import build_parser, main
from scoping_core.config import Settings
from scoping_core.logging_config import TRACE, resolve_level, setup_logging, get_logger

CONFIG_YAML = """
server:
  host: 127.0.0.1
  port: 9090
database:
  type: memory
  project_id: yaml-project
  collections:
    users: people
completion:
  api_key: "${SCOPING_TEST_API_KEY}"
  model_id: gpt-4o
  retry_attempts: 5
"""


@pytest.mark.parametrize("name, level", [
    ("trace", TRACE),
    ("debug", logging.DEBUG),
    ("info", logging.INFO),
    ("warn", logging.WARNING),
    ("error", logging.ERROR),
    ("DEBUG", logging.DEBUG),
    ("verbose", logging.ERROR),
    (None, logging.ERROR),
])
def test_resolve_level(name, level):
    assert resolve_level(name) == level


def test_setup_logging_configures_application_logger():
    logger = setup_logging("debug")
    assert logger.name == "scoping"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1

    setup_logging("warn")
    assert len(logger.handlers) == 1
    assert get_logger("users").getEffectiveLevel() == logging.WARNING


def test_settings_from_yaml_and_env(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(CONFIG_YAML)
    monkeypatch.setenv("SCOPING_TEST_API_KEY", "sk-from-env")
    monkeypatch.setenv("LOG_LEVEL", "info")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("DATASTORE_BACKEND", raising=False)
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS_JSON", raising=False)

    settings = Settings.from_env(project_id="cli-project", config_path=str(config_file))

    assert settings.project_id == "cli-project"
    assert settings.host == "127.0.0.1"
    assert settings.port == 9090
    assert settings.datastore == "memory"
    assert settings.collections["users"] == "people"
    assert settings.collections["messages"] == "messages"
    assert settings.completion_api_key == "sk-from-env"
    assert settings.completion_model_id == "gpt-4o"
    assert settings.retry_attempts == 5
    assert settings.log_level == "info"
    assert settings.to_dict()["completion_api_key"] == "***"


def test_unexpanded_api_key_is_treated_as_unset(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(CONFIG_YAML)
    monkeypatch.delenv("SCOPING_TEST_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    settings = Settings.from_env(config_path=str(config_file))

    assert settings.project_id == "yaml-project"
    assert settings.completion_api_key is None


def test_missing_config_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DATASTORE_BACKEND", raising=False)
    settings = Settings.from_env(project_id="p", config_path=str(tmp_path / "absent.yaml"))

    assert settings.port == 8080
    assert settings.shutdown_timeout == 15
    assert settings.log_level == "error"
    assert settings.datastore == "firestore"


def test_validate_requires_project_and_known_backend():
    with pytest.raises(ValueError):
        Settings().validate()
    with pytest.raises(ValueError):
        Settings(project_id="p", datastore="postgres").validate()
    Settings(project_id="p", datastore="memory").validate()


def test_project_id_flag_is_parsed():
    args = build_parser().parse_args(["--project-id", "my-project"])
    assert args.project_id == "my-project"
    assert args.config_path == "config.yaml"


def test_main_without_project_id_prints_usage_and_fails(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "--project-id" in err
    assert "usage:" in err


def test_create_app_logs_masked_settings(capsys):
    from app import create_app
    from conftest import FakeCompletionClient, StaticTokenVerifier

    settings = Settings(
        project_id="test-project",
        datastore="memory",
        log_level="debug",
        completion_api_key="sk-very-secret",
    )
    create_app(settings, completion_client=FakeCompletionClient(), token_verifier=StaticTokenVerifier())

    err = capsys.readouterr().err
    assert "Settings: " in err
    assert "'completion_api_key': '***'" in err
    assert "sk-very-secret" not in err
    setup_logging("error")


def test_empty_config_file_loads_as_empty(tmp_path):
    from config import load_config

    config_file = tmp_path / "config.yaml"
    config_file.write_text("")
    assert load_config(str(config_file)) == {}
