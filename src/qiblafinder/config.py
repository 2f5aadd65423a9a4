"""Runtime configuration: app defaults, overridable from QIBLA_* environment variables."""

import logging
import os
from dataclasses import dataclass

from qiblafinder.direction import DEFAULT_ALIGNMENT_THRESHOLD
from qiblafinder.methods import madhab_from_name, method_from_name
from qiblafinder.models import CalculationMethod, Madhab

DEFAULT_USER_AGENT = "QiblaFinder/1.0 (https://github.com/qiblafinder/qiblafinder)"


@dataclass(frozen=True)
class Settings:
    default_method: CalculationMethod = CalculationMethod.MUSLIM_WORLD_LEAGUE
    default_madhab: Madhab = Madhab.SHAFI
    alignment_threshold: float = DEFAULT_ALIGNMENT_THRESHOLD  # Degrees
    compass_points: int = 8  # 8 or 16
    nominatim_user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"


def _env(name: str, parse, default):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}={raw!r}: {exc}") from exc


def _parse_threshold(raw: str) -> float:
    value = float(raw)
    if not 0 < value <= 180:
        raise ValueError("must be in (0, 180]")
    return value


def _parse_points(raw: str) -> int:
    value = int(raw)
    if value not in (8, 16):
        raise ValueError("must be 8 or 16")
    return value


def _parse_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError("unknown log level")
    return level


def load_settings() -> Settings:
    """Build Settings from QIBLA_* environment variables.

    Unset or empty variables keep the defaults.

    Raises:
        ValueError: A variable is set but cannot be parsed; the message names it.
    """
    defaults = Settings()
    return Settings(
        default_method=_env(
            "QIBLA_DEFAULT_METHOD", method_from_name, defaults.default_method
        ),
        default_madhab=_env(
            "QIBLA_DEFAULT_MADHAB", madhab_from_name, defaults.default_madhab
        ),
        alignment_threshold=_env(
            "QIBLA_ALIGNMENT_THRESHOLD", _parse_threshold, defaults.alignment_threshold
        ),
        compass_points=_env("QIBLA_COMPASS_POINTS", _parse_points, defaults.compass_points),
        nominatim_user_agent=_env(
            "QIBLA_NOMINATIM_USER_AGENT", str.strip, defaults.nominatim_user_agent
        ),
        log_level=_env("QIBLA_LOG_LEVEL", _parse_level, defaults.log_level),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
