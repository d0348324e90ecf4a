from __future__ import annotations

from dataclasses import dataclass, replace
import os
from typing import Optional

from .errors import ConfigurationError

DEFAULT_TRIAL_COUNT = 500
DEFAULT_MAX_SIZE = 64
DEFAULT_MAX_SHRINK_STEPS = 1000


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class CheckConfig:
    trial_count: int = DEFAULT_TRIAL_COUNT
    max_size: int = DEFAULT_MAX_SIZE
    seed: Optional[int] = None
    shrink: bool = True
    max_shrink_steps: int = DEFAULT_MAX_SHRINK_STEPS

    def validate(self) -> "CheckConfig":
        if self.trial_count <= 0:
            raise ConfigurationError(
                f"trial count must be positive, got {self.trial_count}"
            )
        if self.max_size <= 0:
            raise ConfigurationError(f"max size must be positive, got {self.max_size}")
        if self.max_shrink_steps < 0:
            raise ConfigurationError(
                f"max shrink steps must be non-negative, got {self.max_shrink_steps}"
            )
        if self.seed is not None and self.seed < 0:
            raise ConfigurationError(f"seed must be non-negative, got {self.seed}")
        return self

    def with_overrides(self, **changes: object) -> "CheckConfig":
        """Copy with every non-``None`` keyword applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


def load_check_config() -> CheckConfig:
    return CheckConfig(
        trial_count=_env_int("QUICKDIFF_TRIALS", DEFAULT_TRIAL_COUNT),
        max_size=_env_int("QUICKDIFF_MAX_SIZE", DEFAULT_MAX_SIZE),
        seed=_env_int("QUICKDIFF_SEED", None),
        shrink=_env_flag("QUICKDIFF_SHRINK", default=True),
    )


__all__ = ["CheckConfig", "load_check_config"]
