from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "cryptcrawl"
ENV_PREFIX = "CRYPTCRAWL_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass
class GenerationSettings:
    """Parameters for the rooms-and-corridors level generator.

    - max_rooms: number of placement attempts (accepted rooms can be fewer).
    - min_size / max_size: half-open range for sampled room width and height.
    - seed: master run seed; each depth derives its own layout seed from it.
      None means a fresh non-deterministic layout every time.
    """

    width: int = 80
    height: int = 40
    max_rooms: int = 30
    min_size: int = 6
    max_size: int = 10
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_rooms < 1:
            raise ValueError("max_rooms must be >= 1")
        if self.min_size < 1:
            raise ValueError("min_size must be >= 1")
        if self.max_size <= self.min_size:
            raise ValueError("max_size must be greater than min_size")
        if self.width < self.max_size + 3 or self.height < self.max_size + 3:
            raise ValueError(
                f"Map {self.width}x{self.height} is too small for rooms up to {self.max_size} tiles"
            )


@dataclass
class DebugSettings:
    # Development builds treat invariant violations as fatal.
    strict_invariants: bool = True


@dataclass
class Settings:
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    debug: DebugSettings = field(default_factory=DebugSettings)

    @staticmethod
    def default_user_path() -> Path:
        return Path(user_config_dir(APP_NAME)) / "settings.yaml"

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        return Settings(
            generation=GenerationSettings(**data.get("generation", {})),
            debug=DebugSettings(**data.get("debug", {})),
        )

    @staticmethod
    def _env_overrides(environ: Dict[str, str]) -> dict:
        generation: Dict[str, Any] = {}
        for key in ("seed", "width", "height", "max_rooms", "min_size", "max_size"):
            raw = environ.get(ENV_PREFIX + key.upper())
            if raw is None or raw == "":
                continue
            try:
                generation[key] = int(raw)
            except ValueError as e:
                raise ValueError(f"{ENV_PREFIX}{key.upper()} must be an integer, got {raw!r}") from e

        debug: Dict[str, Any] = {}
        strict = environ.get(ENV_PREFIX + "STRICT")
        if strict is not None and strict != "":
            value = strict.strip().lower()
            if value in _TRUE_STRINGS:
                debug["strict_invariants"] = True
            elif value in _FALSE_STRINGS:
                debug["strict_invariants"] = False
            else:
                raise ValueError(f"{ENV_PREFIX}STRICT must be a boolean, got {strict!r}")

        overrides: dict = {}
        if generation:
            overrides["generation"] = generation
        if debug:
            overrides["debug"] = debug
        return overrides

    @classmethod
    def load(
        cls,
        user_path: Optional[Path] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> "Settings":
        """Load settings from built-in defaults, an optional user YAML file and the environment.

        Precedence (lowest first): packaged defaults, user file, CRYPTCRAWL_* variables.
        When user_path is None the platform config directory is consulted.
        """
        try:
            with resources.files("cryptcrawl.data").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        explicit = user_path is not None
        path = user_path if explicit else cls.default_user_path()
        user_data = {}
        if path.exists():
            user_data = cls._load_yaml(path)
            logger.info("Loaded user settings from %s", path)
        elif explicit:
            logger.warning("User settings file not found: %s", path)

        merged = cls._deep_merge(default_data, user_data)
        merged = cls._deep_merge(merged, cls._env_overrides(dict(os.environ if environ is None else environ)))
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
