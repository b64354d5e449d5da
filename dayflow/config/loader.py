"""
Configuration loader
Supports loading configuration from TOML and YAML files, with environment variable override support
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import toml
import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DAYFLOW_CONFIG"


class ConfigLoader:
    """Configuration loader class"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or self._get_default_config_file()
        self._config: Dict[str, Any] = {}

    def _get_default_config_file(self) -> str:
        """Get default configuration file path

        Strategy:
        1. DAYFLOW_CONFIG environment variable, if set
        2. ~/.config/dayflow/config.toml (created from the default template during load())
        """
        env_file = os.getenv(CONFIG_ENV_VAR)
        if env_file:
            return str(Path(env_file).expanduser())

        user_config_file = Path.home() / ".config" / "dayflow" / "config.toml"
        logger.info(f"Using user configuration file: {user_config_file}")
        return str(user_config_file)

    def load(self) -> Dict[str, Any]:
        """Load configuration, create default configuration if it doesn't exist"""
        config_path = Path(self.config_file)

        if not config_path.exists():
            logger.info(f"Configuration file doesn't exist: {self.config_file}")
            self._create_default_config(config_path)

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                config_content = f.read()

            config_content = self._replace_env_vars(config_content)

            if self.config_file.endswith((".yaml", ".yml")):
                self._config = yaml.safe_load(config_content) or {}
            else:
                self._config = toml.loads(config_content)

            logger.info(f"Configuration file loaded: {self.config_file}")
            return self._config

        except (yaml.YAMLError, toml.TomlDecodeError) as e:
            logger.error(f"Configuration file parsing error: {e}")
            raise

    def _create_default_config(self, config_path: Path) -> None:
        """Create default configuration file"""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(self._get_default_config_content(config_path.parent))
        logger.info(f"Default configuration file created: {config_path}")

    def _get_default_config_content(self, data_dir: Path) -> str:
        """Get default configuration content"""
        if config_path_is_yaml(self.config_file):
            return yaml.safe_dump(default_config(data_dir), sort_keys=False)
        return toml.dumps(default_config(data_dir))

    def _replace_env_vars(self, content: str) -> str:
        """Replace ${VAR_NAME} or ${VAR_NAME:default_value} placeholders"""

        def replace_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) else ""
            return os.getenv(var_name, default_value)

        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"
        return re.sub(pattern, replace_var, content)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value, supports dot-separated nested keys"""
        keys = key.split(".")
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> bool:
        """Set configuration value, supports dot-separated nested keys"""
        keys = key.split(".")
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        return self.save()

    def save(self) -> bool:
        """Save configuration to file"""
        try:
            config_path = Path(self.config_file)
            config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_file, "w", encoding="utf-8") as f:
                if config_path_is_yaml(self.config_file):
                    yaml.safe_dump(self._config, f, sort_keys=False)
                else:
                    toml.dump(self._config, f)

            logger.info(f"Configuration saved to: {self.config_file}")
            return True

        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            return False


def config_path_is_yaml(path: str) -> bool:
    return path.endswith((".yaml", ".yml"))


def default_config(data_dir: Path) -> Dict[str, Any]:
    """Default configuration values, rooted at the given data directory"""
    return {
        "server": {"host": "0.0.0.0", "port": 8000, "debug": False},
        "database": {"path": str(data_dir / "dayflow.db")},
        "logging": {
            "level": "INFO",
            "logs_dir": str(data_dir / "logs"),
            "max_file_size": "10MB",
            "backup_count": 5,
        },
        "rate_limit": {
            "max_requests": 100,
            "window_seconds": 60,
            "cleanup_threshold": 10000,
        },
        "metadata": {
            "timeout": 8.0,
            "max_bytes": 100000,
            "user_agent": "DayFlow/1.0 (+https://dayflow.app)",
            "max_redirects": 5,
            "allow_private_hosts": False,
        },
        "auth": {
            # "static" maps bearer tokens from [auth.tokens]; "remote" asks the identity service
            "provider": "static",
            "url": "",
            "api_key": "",
            "tokens": {},
        },
    }


# Global configuration instance
_config_instance: Optional[ConfigLoader] = None


def get_config(config_file: Optional[str] = None) -> ConfigLoader:
    """Get global configuration instance"""
    global _config_instance
    if config_file is not None:
        _config_instance = ConfigLoader(config_file)
        _config_instance.load()
    elif _config_instance is None:
        _config_instance = ConfigLoader()
        _config_instance.load()
    return _config_instance
