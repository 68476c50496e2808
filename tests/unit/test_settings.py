"""Unit tests for configuration loading and logging setup."""

import logging

import yaml

from authviz.config import (
    AuthvizConfig,
    ConfigLoader,
    DataServiceConfig,
    get_config,
    reload_config,
)
from authviz.config.logging import StructuredLogger, get_logging_config


def _write_yaml(directory, name, data):
    with open(directory / name, "w") as file:
        yaml.safe_dump(data, file)


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    def test_defaults_without_files(self, temp_directory):
        config = ConfigLoader(temp_directory).load_config("development")

        assert config.server.port == 8000
        assert config.server.environment == "development"
        assert config.data_service == DataServiceConfig()
        assert config.analysis.max_role_depth == 5

    def test_environment_overlay_is_merged(self, temp_directory):
        _write_yaml(temp_directory, "authviz.yaml", {
            "server": {"host": "localhost", "port": 8000},
            "logging": {"level": "INFO", "format": "text"},
        })
        _write_yaml(temp_directory, "production.yaml", {
            "server": {"host": "0.0.0.0"},
            "logging": {"format": "json"},
        })

        config = ConfigLoader(temp_directory).load_config("production")

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8000
        assert config.server.environment == "production"
        assert config.logging.level == "INFO"
        assert config.logging.format == "json"

    def test_explicit_environment_is_kept(self, temp_directory):
        _write_yaml(temp_directory, "authviz.yaml", {"server": {"environment": "staging"}})

        assert ConfigLoader(temp_directory).load_config("test").server.environment == "staging"

    def test_environment_variable_substitution(self, temp_directory, mock_environment_variables):
        _write_yaml(temp_directory, "authviz.yaml", {
            "server": {"host": "${TEST_AUTHVIZ_HOST:localhost}", "port": "${TEST_AUTHVIZ_PORT:8000}"},
            "data_service": {"source": "${TEST_AUTHVIZ_SOURCE}"},
        })

        with mock_environment_variables(TEST_AUTHVIZ_PORT="9100", TEST_AUTHVIZ_SOURCE="remote"):
            config = ConfigLoader(temp_directory).load_config("development")

        assert config.server.host == "localhost"
        assert config.server.port == 9100
        assert config.data_service.source == "remote"

    def test_unset_variable_without_default_is_left_alone(self, temp_directory):
        _write_yaml(temp_directory, "authviz.yaml", {"data_service": {"source": "${TEST_AUTHVIZ_UNSET}"}})

        config = ConfigLoader(temp_directory).load_config("development")

        assert config.data_service.source == "${TEST_AUTHVIZ_UNSET}"

    def test_data_service_sections_are_flattened(self, temp_directory):
        _write_yaml(temp_directory, "authviz.yaml", {
            "data_service": {
                "source": "remote",
                "local": {"enabled": False},
                "remote": {
                    "enabled": True,
                    "api_url": "http://authz.example.com",
                    "base_url": "/authz",
                    "timeout_seconds": 5,
                },
            }
        })

        settings = ConfigLoader(temp_directory).load_config("development").data_service

        assert settings == DataServiceConfig(
            source="remote",
            local_enabled=False,
            remote_enabled=True,
            api_url="http://authz.example.com",
            base_url="/authz",
            timeout_seconds=5.0,
        )

    def test_invalid_yaml_is_ignored(self, temp_directory):
        (temp_directory / "authviz.yaml").write_text("server: [unclosed")

        config = ConfigLoader(temp_directory).load_config("development")

        assert config.server.host == "localhost"

    def test_raw_config_is_kept(self, temp_directory):
        _write_yaml(temp_directory, "authviz.yaml", {"custom": {"key": "value"}})

        config = ConfigLoader(temp_directory).load_config("development")

        assert config.raw_config["custom"] == {"key": "value"}

    def test_config_dir_from_environment(self, temp_directory, mock_environment_variables):
        with mock_environment_variables(AUTHVIZ_CONFIG_DIR=str(temp_directory)):
            loader = ConfigLoader()

        assert loader.config_dir == temp_directory

    def test_load_file(self, temp_directory):
        _write_yaml(temp_directory, "roles.yaml", {"roles": [{"role": "sales:rep"}]})
        loader = ConfigLoader(temp_directory)

        assert loader.load_file("roles.yaml") == {"roles": [{"role": "sales:rep"}]}
        assert loader.load_file("missing.yaml", {"roles": []}) == {"roles": []}
        assert loader.load_file("missing.yaml") == {}

    def test_shipped_config_files_load(self):
        loader = ConfigLoader()

        for environment in ("development", "production"):
            config = loader.load_config(environment)
            assert config.server.environment == environment
            assert config.data_service.local_enabled is True

        assert loader.load_file("roles.yaml")["roles"]
        assert loader.load_file("catalog.yaml")["domains"]


class TestGlobalConfig:
    """Test cases for the cached global configuration."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_config_package_logger(self):
        import authviz.config

        assert isinstance(authviz.config.logger, logging.Logger)
        assert authviz.config.logger.name == "authviz.config"

    def test_reload_config(self):
        first = get_config()
        second = reload_config("production")

        assert second is not first
        assert second.server.environment == "production"
        assert get_config() is second


class TestLoggingConfig:
    """Test cases for logging configuration."""

    def test_text_format(self):
        config = get_logging_config(log_level="DEBUG", log_format="text")

        assert config["handlers"]["console"]["formatter"] == "detailed"
        assert config["loggers"]["authviz"]["level"] == "DEBUG"
        assert config["loggers"]["httpx"]["level"] == "WARNING"
        assert "file" not in config["handlers"]

    def test_json_format(self):
        config = get_logging_config(log_format="json")

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["formatters"]["json"]["()"] == "pythonjsonlogger.json.JsonFormatter"

    def test_log_file_handler(self, temp_directory):
        log_file = str(temp_directory / "authviz.log")

        config = get_logging_config(log_file=log_file)

        assert config["handlers"]["file"]["filename"] == log_file
        assert config["loggers"][""]["handlers"] == ["console", "file"]

    def test_access_log_toggle(self):
        assert "uvicorn.access" in get_logging_config(enable_access_log=True)["loggers"]
        assert "uvicorn.access" not in get_logging_config(enable_access_log=False)["loggers"]


class TestStructuredLogger:
    """Test cases for StructuredLogger."""

    def test_log_fetch_success(self, caplog):
        with caplog.at_level(logging.INFO, logger="structured.test"):
            StructuredLogger("structured.test").log_fetch("report", "/api/authorization/report", 200, 12.5)

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.resource == "report"
        assert record.status_code == 200

    def test_log_fetch_failure_is_warning(self, caplog):
        with caplog.at_level(logging.INFO, logger="structured.test"):
            StructuredLogger("structured.test").log_fetch("catalog", "/x", 503, 1.0)

        assert caplog.records[-1].levelno == logging.WARNING

    def test_log_refresh(self, caplog):
        with caplog.at_level(logging.INFO, logger="structured.test"):
            StructuredLogger("structured.test").log_refresh("local", 5, 3.2, issue_count=2)

        record = caplog.records[-1]
        assert record.event == "data_refresh"
        assert record.max_depth == 5
        assert record.issue_count == 2


def test_config_model_defaults():
    config = AuthvizConfig()

    assert config.server.api_prefix == "/api/authorization"
    assert config.data_service.source == "local"
    assert config.logging.file is None
