"""Config loader for chatbot authoring files."""

from pathlib import Path
from typing import Any

import yaml

from menuflow.config.models import ChatbotConfig
from menuflow.core.errors import ConfigError

DEFAULT_FILENAMES = ("chatbot.yaml", "menuflow.yaml")


class ConfigLoader:
    """Load ChatbotConfig from YAML files."""

    @staticmethod
    def resolve(path: Path | str) -> Path:
        """Return the YAML file for ``path`` (a file or a directory)."""
        config_path = Path(path)

        if config_path.is_dir():
            for filename in DEFAULT_FILENAMES:
                candidate = config_path / filename
                if candidate.exists():
                    return candidate
            raise FileNotFoundError(f"No chatbot config found in {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    @staticmethod
    def load(path: Path | str) -> ChatbotConfig:
        """Load a chatbot authoring file.

        Args:
            path: Path to a YAML file or a directory holding chatbot.yaml

        Returns:
            Parsed ChatbotConfig instance

        Raises:
            FileNotFoundError: If no file can be found.
            yaml.YAMLError: If the file is not valid YAML.
            ConfigError: If the file is not a mapping or has an unsupported version.
        """
        yaml_file = ConfigLoader.resolve(path)

        with open(yaml_file, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigError("Chatbot config must be a mapping", path=str(yaml_file))

        return ChatbotConfig.model_validate(data)
