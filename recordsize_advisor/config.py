# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - PercentileConfig (dataclass)
#     write_target: float  (default 0.50)  → sequential-write tier
#     mixed_target: float  (default 0.70)  → mixed tier
#     read_target: float   (default 0.90)  → sequential-read tier
#
# - SkewConfig (dataclass)
#     policy: str                              (default "canonical")
#     min_small_count_fraction: float | None   (default None → policy value)
#     min_large_byte_fraction: float | None    (default None → policy value)
#     min_small_files: int | None              (default None → policy value)
#
# - DisplayConfig (dataclass)
#     color: bool                  (default True)
#     progress: bool               (default True)
#     histogram_width: int         (default 35)
#     progress_update_every: int   (default 727)
#
# - AppConfig (dataclass)
#     percentiles: PercentileConfig
#     skew: SkewConfig
#     display: DisplayConfig
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests).
#
# USAGE:
# ------
#   from recordsize_advisor.config import get_config
#   config = get_config()
#   print(config.skew.policy)
#   print(config.percentiles.read_target)
#
# ==============================================

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from recordsize_advisor.analysis.decision import SKEW_POLICIES, SkewThresholds, WorkloadTier


@dataclass
class PercentileConfig:
    """Space percentile used for each workload tier."""
    write_target: float = 0.50
    mixed_target: float = 0.70
    read_target: float = 0.90

    def as_targets(self) -> Dict[WorkloadTier, float]:
        return {
            WorkloadTier.SEQUENTIAL_WRITE: self.write_target,
            WorkloadTier.MIXED: self.mixed_target,
            WorkloadTier.SEQUENTIAL_READ: self.read_target,
        }


@dataclass
class SkewConfig:
    """Skew detection policy and optional per-value overrides."""
    policy: str = "canonical"
    min_small_count_fraction: Optional[float] = None
    min_large_byte_fraction: Optional[float] = None
    min_small_files: Optional[int] = None

    def to_thresholds(self) -> SkewThresholds:
        """
        Build the SkewThresholds for this configuration.

        Starts from the named policy, then applies any explicit override.
        """
        thresholds = SkewThresholds.for_policy(self.policy)
        overrides = {}
        if self.min_small_count_fraction is not None:
            overrides["min_small_count_fraction"] = self.min_small_count_fraction
        if self.min_large_byte_fraction is not None:
            overrides["min_large_byte_fraction"] = self.min_large_byte_fraction
        if self.min_small_files is not None:
            overrides["min_small_files"] = self.min_small_files
        return replace(thresholds, **overrides)


@dataclass
class DisplayConfig:
    """Terminal output configuration."""
    color: bool = True
    progress: bool = True
    histogram_width: int = 35
    progress_update_every: int = 727


@dataclass
class AppConfig:
    """Main application configuration."""
    percentiles: PercentileConfig = field(default_factory=PercentileConfig)
    skew: SkewConfig = field(default_factory=SkewConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(
        f"{name} must be one of {', '.join(_TRUE_VALUES + _FALSE_VALUES)}, got {value!r}"
    )


def _get_optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


def _get_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If SKEW_POLICY names an unknown policy, a
                    PERCENTILE_* value is outside (0, 1) or a flag
                    variable is not a recognised boolean
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build percentile configuration
    percentile_config = PercentileConfig(
        write_target=float(os.getenv("PERCENTILE_WRITE", "0.50")),
        mixed_target=float(os.getenv("PERCENTILE_MIXED", "0.70")),
        read_target=float(os.getenv("PERCENTILE_READ", "0.90")),
    )
    for tier, target in percentile_config.as_targets().items():
        if not 0.0 < target < 1.0:
            raise ValueError(
                f"Percentile target for {tier.value} must be in (0, 1), got {target}"
            )

    # Build skew configuration
    policy = os.getenv("SKEW_POLICY", "canonical")
    if policy not in SKEW_POLICIES:
        raise ValueError(
            f"SKEW_POLICY must be one of {', '.join(SKEW_POLICIES)}, got {policy!r}"
        )
    skew_config = SkewConfig(
        policy=policy,
        min_small_count_fraction=_get_optional_float("SKEW_MIN_SMALL_COUNT_FRACTION"),
        min_large_byte_fraction=_get_optional_float("SKEW_MIN_LARGE_BYTE_FRACTION"),
        min_small_files=_get_optional_int("SKEW_MIN_SMALL_FILES"),
    )

    # Build display configuration
    display_config = DisplayConfig(
        color=_get_bool("RECORDSIZE_COLOR", True),
        progress=_get_bool("RECORDSIZE_PROGRESS", True),
        histogram_width=int(os.getenv("HISTOGRAM_WIDTH", "35")),
        progress_update_every=int(os.getenv("PROGRESS_UPDATE_EVERY", "727")),
    )

    # Build main application configuration
    _config_instance = AppConfig(
        percentiles=percentile_config,
        skew=skew_config,
        display=display_config,
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
