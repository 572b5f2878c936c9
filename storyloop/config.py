"""Configuration management for Storyloop."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "openai"
    model: str = "gpt-4.1"
    base_url: str = "http://localhost:11434"
    temperature: float = 0.7
    max_tokens: int = 1024
    timeout: float = 120.0


class GameConfig(BaseModel):
    """Game rules configuration."""

    default_variant: str = "adventure"
    question_limit: int = 20
    default_dice_count: int = 1


class PathsConfig(BaseModel):
    """File paths configuration."""

    saves: Path = Path("./saves")
    adventure_save: str = "dnd_adventure_save.json"
    questions_save: str = "twenty_questions_save.json"

    def save_file(self, variant: str) -> Path:
        """Get the well-known save file for a game variant."""
        if variant == "questions":
            return self.saves / self.questions_save
        return self.saves / self.adventure_save


class LoggingConfig(BaseModel):
    """Logging configuration.

    The terminal belongs to the UI, so log records go to a file.
    """

    level: str = "INFO"
    file: Path = Path("./saves/storyloop.log")


class AppConfig(BaseModel):
    """Main application configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    game: GameConfig = Field(default_factory=GameConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG_PATH = Path("config.yaml")


def _config_path(config_path: Path | str | None) -> Path:
    return DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)


def load_config(config_path: Path | str | None = None) -> AppConfig:
    """Read settings from YAML; missing files and sections fall back to defaults.

    Args:
        config_path: YAML file to read, ``./config.yaml`` when omitted

    Raises:
        pydantic.ValidationError: If a value has the wrong type
    """
    path = _config_path(config_path)
    if not path.exists():
        return AppConfig()
    data: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return AppConfig.model_validate(data)


def save_config(config: AppConfig, config_path: Path | str | None = None) -> None:
    """Write settings as YAML, in declaration order."""
    path = _config_path(config_path)
    # JSON mode turns Path values into plain strings
    data = config.model_dump(mode="json")
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Process-wide settings, loaded on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | str | None = None) -> AppConfig:
    """Replace the process-wide settings with a fresh read of ``config_path``."""
    global _config
    _config = load_config(config_path)
    return _config
