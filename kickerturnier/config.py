"""
Configuration loading from config.yaml.

Uses typed dataclasses throughout so the rest of the app gets IDE
completion and type-checker support without touching raw dicts.
Every section is optional; a missing key falls back to its default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from kickerturnier.tournament.standings import ScoringSystem

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ScoringConfig:
    win_points: int = 3
    draw_points: int = 1
    loss_points: int = 0

    def to_scoring_system(self) -> ScoringSystem:
        return ScoringSystem(
            win_points=self.win_points,
            draw_points=self.draw_points,
            loss_points=self.loss_points,
        )


@dataclass
class StorageConfig:
    state_path: str = "./kickerturnier_state.json"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: str = "./logs"

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level)


@dataclass
class Config:
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def state_path(self) -> Path:
        return Path(self.storage.state_path)

    @property
    def log_dir_path(self) -> Path:
        return Path(self.logging.log_dir)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    Raises:
        FileNotFoundError: config.yaml is missing.
        ValueError: the structure or a value is invalid.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {cfg_path.resolve()}\n"
            "Copy config.example.yaml to config.yaml and adjust it."
        )

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    try:
        scoring_raw = raw.get("scoring") or {}
        storage_raw = raw.get("storage") or {}
        logging_raw = raw.get("logging") or {}

        config = Config(
            scoring=ScoringConfig(
                win_points=int(scoring_raw.get("win_points", 3)),
                draw_points=int(scoring_raw.get("draw_points", 1)),
                loss_points=int(scoring_raw.get("loss_points", 0)),
            ),
            storage=StorageConfig(
                state_path=str(storage_raw.get("state_path", "./kickerturnier_state.json")),
            ),
            logging=LoggingConfig(
                level=str(logging_raw.get("level", "INFO")).upper(),
                log_dir=str(logging_raw.get("log_dir", "./logs")),
            ),
        )
    except (AttributeError, TypeError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc

    _validate(config)
    return config


def _validate(config: Config) -> None:
    s = config.scoring
    if min(s.win_points, s.draw_points, s.loss_points) < 0:
        raise ValueError("scoring points must be >= 0")
    if not s.win_points >= s.draw_points >= s.loss_points:
        raise ValueError("scoring must satisfy win_points >= draw_points >= loss_points")
    if config.logging.level not in _LOG_LEVELS:
        raise ValueError(
            f"logging.level must be one of {_LOG_LEVELS}, got '{config.logging.level}'"
        )
