"""
Central configuration for the Qirkat engine.
Pydantic models give type-safe settings loaded from defaults, the environment
or a JSON file.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

# Named search configurations: a one-ply baseline and the full-strength player
SEARCH_PRESETS: Dict[str, int] = {"shallow": 1, "deep": 8}


class UISettings(BaseModel):
    """Text display settings."""

    show_legend: bool = Field(default=False, description="Label rows and columns of the rendered board")
    echo_moves: bool = Field(default=True, description="Announce each move as it is played")

    @field_validator('show_legend', 'echo_moves', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return bool(v)


class EngineSettings(BaseModel):
    """Search engine configuration settings."""

    default_depth: int = Field(default=SEARCH_PRESETS["deep"], ge=1, le=12, description="Default search depth")
    shallow_depth: int = Field(default=SEARCH_PRESETS["shallow"], ge=1, le=12, description="Depth of the baseline player")
    use_pruning: bool = Field(default=True, description="Use alpha-beta pruning (off = full minimax)")

    @field_validator('default_depth', 'shallow_depth', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class GameRulesSettings(BaseModel):
    """Rule boundaries that must be verifiable against the official rules."""

    block_far_rank_lateral: bool = Field(
        default=True,
        description="Forbid sideways steps on the row farthest from the mover's side",
    )

    @field_validator('block_far_rank_lateral', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return bool(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="qirkat.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class QirkatConfig(BaseModel):
    """Main configuration model."""

    ui: UISettings = Field(default_factory=UISettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    rules: GameRulesSettings = Field(default_factory=GameRulesSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Metadata
    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'QirkatConfig':
        """Create configuration from environment variables."""
        return cls(
            ui=UISettings(
                show_legend=os.getenv('QIRKAT_LEGEND', 'false').lower() == 'true',
                echo_moves=os.getenv('QIRKAT_ECHO', 'true').lower() == 'true',
            ),
            engine=EngineSettings(
                default_depth=int(os.getenv('QIRKAT_DEPTH', str(SEARCH_PRESETS["deep"]))),
                shallow_depth=int(os.getenv('QIRKAT_SHALLOW_DEPTH', str(SEARCH_PRESETS["shallow"]))),
                use_pruning=os.getenv('QIRKAT_PRUNING', 'true').lower() == 'true',
            ),
            rules=GameRulesSettings(
                block_far_rank_lateral=os.getenv('QIRKAT_FAR_RANK_RULE', 'true').lower() == 'true',
            ),
            logging=LoggingSettings(
                log_level=os.getenv('QIRKAT_LOG_LEVEL', 'INFO'),
                log_to_file=os.getenv('QIRKAT_LOG_FILE', 'false').lower() == 'true',
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'ui': self.ui.model_dump(),
            'engine': self.engine.model_dump(),
            'rules': self.rules.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'QirkatConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            ui=UISettings(**data.get('ui', {})),
            engine=EngineSettings(**data.get('engine', {})),
            rules=GameRulesSettings(**data.get('rules', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                for key, value in settings.items():
                    if hasattr(section_model, key):
                        setattr(section_model, key, value)


# Global configuration instance
_config: Optional[QirkatConfig] = None


def get_config() -> QirkatConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = QirkatConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> QirkatConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = QirkatConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_ui_settings() -> UISettings:
    return get_config().ui


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_game_rules() -> GameRulesSettings:
    return get_config().rules


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def resolve_depth(depth: Optional[int] = None, preset: Optional[str] = None) -> int:
    """Pick a search depth: explicit DEPTH, else a named PRESET, else the configured default.

    The shallow preset follows EngineSettings.shallow_depth.
    """
    if depth is not None:
        return int(depth)
    if preset is not None:
        if preset not in SEARCH_PRESETS:
            raise ValueError(f"unknown search preset {preset!r}; expected one of {sorted(SEARCH_PRESETS)}")
        if preset == "shallow":
            return get_engine_settings().shallow_depth
        return SEARCH_PRESETS[preset]
    return get_engine_settings().default_depth


def setup_logging() -> None:
    """Configure root logging once, controlled by the logging settings."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    level: int = getattr(logging, settings.log_level, logging.INFO)
    handlers = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(logging.FileHandler(settings.log_file_path))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
