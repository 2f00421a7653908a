"""
Configuration management for FeedPulse.
"""
import copy
import os
import json
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = 'FEEDPULSE_'

# Default configuration
DEFAULT_CONFIG = {
    "reading": {
        "words_per_minute": 200,
        "summary_length": 150
    },
    "keywords": {
        "max_keywords": 10,
        "min_length": 4
    },
    "recommendations": {
        "max_recommendations": 10,
        "history_size": 5,
        "category_bonus": 0.2,
        "recency_window_days": 30,
        "similarity_weight": 0.7,
        "recency_weight": 0.3,
        "per_category": 5
    },
    "statistics": {
        "daily_window_days": 14,
        "streak_max_days": 365,
        "top_categories": 3
    },
    "tracking": {
        "tick_seconds": 5
    }
}

class Config:
    """
    Configuration manager for FeedPulse.
    """
    def __init__(self, config_path: Optional[str] = None, env_prefix: str = ENV_PREFIX):
        """
        Initialize the Config.

        Args:
            config_path: Path to a YAML or JSON configuration file
            env_prefix: Prefix of environment variables that override settings
        """
        self.config_path = config_path
        self.env_prefix = env_prefix
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file or use defaults.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path:
            try:
                path = Path(self.config_path)
                if path.exists():
                    if path.suffix.lower() in ['.yaml', '.yml']:
                        with open(path, 'r') as f:
                            user_config = yaml.safe_load(f) or {}
                    elif path.suffix.lower() == '.json':
                        with open(path, 'r') as f:
                            user_config = json.load(f)
                    else:
                        raise ValueError(f"Unsupported config file format: {path.suffix}")

                    self._update_dict(config, user_config)
                else:
                    logger.warning(f"Config file {self.config_path} not found, using defaults")
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.warning(f"Error loading config from {self.config_path}: {e}")
                logger.warning("Using default configuration")

        self._override_from_env(config, self.env_prefix)

        return config

    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.

        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _override_from_env(self, config: Dict, prefix: str = ENV_PREFIX) -> None:
        """
        Override configuration with environment variables.

        ``FEEDPULSE_RECOMMENDATIONS__HISTORY_SIZE=3`` sets
        ``recommendations.history_size``. Sections are separated by a double
        underscore so that keys may contain single underscores.

        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        for key, value in os.environ.items():
            if not key.startswith(prefix) or key == f"{prefix}CONFIG_PATH":
                continue

            parts = key[len(prefix):].lower().split('__')

            current = config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            try:
                current[parts[-1]] = json.loads(value)
            except json.JSONDecodeError:
                current[parts[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., 'tracking.tick_seconds')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        parts = key.split('.')
        current = self.config

        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def save(self, path: Optional[str] = None) -> bool:
        """
        Save the current configuration to a file.

        Args:
            path: Path to save the configuration to

        Returns:
            True if successful, False otherwise
        """
        save_path = path or self.config_path
        if not save_path:
            logger.error("No path specified for saving configuration")
            return False

        try:
            path = Path(save_path)
            if path.suffix.lower() in ['.yaml', '.yml']:
                with open(path, 'w') as f:
                    yaml.dump(self.config, f, default_flow_style=False)
            elif path.suffix.lower() == '.json':
                with open(path, 'w') as f:
                    json.dump(self.config, f, indent=2)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error saving config to {save_path}: {e}")
            return False


# Global configuration instance
config = Config(os.getenv('FEEDPULSE_CONFIG_PATH'))

def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Args:
        key: Dot-separated key path (e.g., 'recommendations.history_size')
        default: Default value if key not found

    Returns:
        Configuration value
    """
    return config.get(key, default)
