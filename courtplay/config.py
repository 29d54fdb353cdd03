"""
Engine configuration.

Controls timeline, history and export defaults.
All settings can be overridden via environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class EngineConfig:
    """Defaults for playback, history and batch export."""

    # Timeline settings
    transition_ms: int = field(
        default_factory=lambda: int(os.getenv("COURTPLAY_TRANSITION_MS", "500"))
    )
    fallback_step_ms: int = field(
        default_factory=lambda: int(os.getenv("COURTPLAY_FALLBACK_STEP_MS", "1000"))
    )
    easing: str = field(default_factory=lambda: os.getenv("COURTPLAY_EASING", "ease_in_out"))

    # Undo/redo depth per stack
    history_size: int = field(
        default_factory=lambda: int(os.getenv("COURTPLAY_HISTORY_SIZE", "50"))
    )

    # Batch export sampling rate
    export_fps: int = field(default_factory=lambda: int(os.getenv("COURTPLAY_EXPORT_FPS", "30")))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("COURTPLAY_LOG_LEVEL", "WARNING"))

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        from courtplay.animation.easing import EASINGS

        errors = []
        if self.transition_ms < 0:
            errors.append("COURTPLAY_TRANSITION_MS must be >= 0")
        if self.fallback_step_ms <= 0:
            errors.append("COURTPLAY_FALLBACK_STEP_MS must be > 0")
        if self.history_size <= 0:
            errors.append("COURTPLAY_HISTORY_SIZE must be > 0")
        if self.export_fps <= 0:
            errors.append("COURTPLAY_EXPORT_FPS must be > 0")
        if self.easing not in EASINGS:
            errors.append(f"COURTPLAY_EASING must be one of {sorted(EASINGS)}")
        return errors


# Singleton config instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the global engine configuration."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def reset_config() -> None:
    """
    Drop the cached configuration so the next get_config() re-reads the env.

    Useful for testing.
    """
    global _config
    _config = None
