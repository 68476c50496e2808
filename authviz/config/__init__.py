import os
import re
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from authviz.config.logging import get_logger, setup_logging

logger = get_logger(__name__)


class ServerConfig(BaseModel):
    """Server configuration settings."""
    host: str = "localhost"
    port: int = 8000
    reload: bool = False
    log_level: str = "info"
    access_log: bool = True
    api_prefix: str = "/api/authorization"
    environment: str = "development"


class DataServiceConfig(BaseModel):
    """Authorization data service settings."""
    source: str = "local"
    local_enabled: bool = True
    remote_enabled: bool = False
    base_url: str = "/api/authorization"
    api_url: Optional[str] = None
    timeout_seconds: float = 30.0


class AnalysisConfig(BaseModel):
    """Analyzer settings."""
    max_role_depth: int = Field(default=5, ge=0)
    include_info_issues: bool = True


class LoggingConfig(BaseModel):
    """Logging settings."""
    level: str = "INFO"
    format: str = "text"
    file: Optional[str] = None


class AuthvizConfig(BaseModel):
    """Main application configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    data_service: DataServiceConfig = Field(default_factory=DataServiceConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Raw configuration for complex nested structures
    raw_config: Dict[str, Any] = Field(default_factory=dict)


class ConfigLoader:
    """Configuration loader for YAML files with environment-specific overrides."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize the configuration loader.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to AUTHVIZ_CONFIG_DIR, then the project's config directory.
        """
        if config_dir is None:
            env_dir = os.getenv("AUTHVIZ_CONFIG_DIR")
            if env_dir:
                self.config_dir = Path(env_dir)
            else:
                self.config_dir = Path(__file__).parent.parent.parent / "config"
        else:
            self.config_dir = Path(config_dir)

    def load_config(self, environment: Optional[str] = None) -> AuthvizConfig:
        """Load configuration for the specified environment.

        Args:
            environment: Environment name (development, production, etc.).
                        If None, will try to detect from ENVIRONMENT variable.

        Returns:
            Loaded and validated configuration.
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        config_data = self._load_base_config()

        env_config = self._load_environment_config(environment)
        if env_config:
            config_data = self._merge_configs(config_data, env_config)

        config_data = self._substitute_env_vars(config_data)
        config_data.setdefault("server", {}).setdefault("environment", environment)

        return self._create_config(config_data)

    def load_file(self, name: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Load an auxiliary YAML file from the config directory."""
        path = self.config_dir / name
        if path.exists():
            return self._substitute_env_vars(self._load_yaml_file(path))
        return dict(default or {})

    def _load_base_config(self) -> Dict[str, Any]:
        """Load the base configuration."""
        base_config_path = self.config_dir / "authviz.yaml"
        if base_config_path.exists():
            return self._load_yaml_file(base_config_path)
        return {}

    def _load_environment_config(self, environment: str) -> Optional[Dict[str, Any]]:
        """Load environment-specific configuration."""
        env_config_path = self.config_dir / f"{environment}.yaml"
        if env_config_path.exists():
            return self._load_yaml_file(env_config_path)
        return None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load and parse a YAML file."""
        try:
            with open(file_path, 'r') as file:
                return yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config file {file_path}: {e}")
            return {}

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _substitute_env_vars(self, config: Any) -> Any:
        """Substitute environment variables in configuration values."""
        if isinstance(config, dict):
            return {key: self._substitute_env_vars(value) for key, value in config.items()}
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._substitute_string_env_vars(config)
        else:
            return config

    def _substitute_string_env_vars(self, value: str) -> str:
        """Substitute environment variables in a string value."""
        # Handle ${VAR_NAME} and ${VAR_NAME:default}
        def replace_env_var(match):
            var_spec = match.group(1)
            if ':' in var_spec:
                var_name, default_value = var_spec.split(':', 1)
                return os.getenv(var_name, default_value)
            else:
                return os.getenv(var_spec, match.group(0))

        return re.sub(r'\$\{([^}]+)\}', replace_env_var, value)

    def _create_config(self, config_data: Dict[str, Any]) -> AuthvizConfig:
        """Create an AuthvizConfig object from configuration data."""
        return AuthvizConfig(
            server=ServerConfig(**config_data.get("server", {})),
            data_service=DataServiceConfig(**self._flatten_data_service_config(config_data.get("data_service", {}))),
            analysis=AnalysisConfig(**config_data.get("analysis", {})),
            logging=LoggingConfig(**config_data.get("logging", {})),
            raw_config=config_data
        )

    def _flatten_data_service_config(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Flatten the nested local/remote sections for the Pydantic model."""
        result = {key: value for key, value in data.items() if key not in ("local", "remote")}

        local = data.get("local", {})
        if "enabled" in local:
            result["local_enabled"] = local["enabled"]

        remote = data.get("remote", {})
        if "enabled" in remote:
            result["remote_enabled"] = remote["enabled"]
        for key in ("base_url", "api_url", "timeout_seconds"):
            if key in remote:
                result[key] = remote[key]

        return result


# Global configuration instance
_config_loader = ConfigLoader()
_config: Optional[AuthvizConfig] = None


def get_config() -> AuthvizConfig:
    """Get the current configuration."""
    global _config
    if _config is None:
        _config = _config_loader.load_config()
    return _config


def reload_config(environment: Optional[str] = None) -> AuthvizConfig:
    """Reload the configuration."""
    global _config
    _config = _config_loader.load_config(environment)
    return _config


def get_roles_config() -> Dict[str, Any]:
    """Load the role registry seed from roles.yaml."""
    return _config_loader.load_file("roles.yaml", {"roles": []})


def get_catalog_config() -> Dict[str, Any]:
    """Load the domain catalog from catalog.yaml."""
    return _config_loader.load_file("catalog.yaml", {"domains": []})


__all__ = [
    "AnalysisConfig",
    "AuthvizConfig",
    "ConfigLoader",
    "DataServiceConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_catalog_config",
    "get_config",
    "get_logger",
    "get_roles_config",
    "reload_config",
    "setup_logging",
]
