"""Persistent JSON settings for context pinning.

Stores truncation budgets, the excluded-path globs, the idle refresh period,
and per-document-type validity patterns. All access is defensive: malformed
or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "contextpin"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_IDLE_REFRESH_SECONDS = 0.5


@dataclass(frozen=True)
class Settings:
    use_overlay_strategy: bool = True
    lines_kept_from_top: int = 0
    lines_kept_from_bottom: int = 0
    excluded_path_globs: tuple[str, ...] = ()
    idle_refresh_seconds: float = DEFAULT_IDLE_REFRESH_SECONDS
    validity_patterns: dict[str, re.Pattern[str]] = field(default_factory=dict, hash=False)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception:
        logger.warning("Ignoring unreadable config at %s", CONFIG_PATH, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        logger.warning("Failed to write config to %s", CONFIG_PATH, exc_info=True)


def _coerce_nonnegative_int(value: object) -> int:
    """Booleans and non-integers are treated as invalid and coerced to ``0``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def _coerce_positive_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if value > 0 else default


def _coerce_globs(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def _coerce_patterns(value: object) -> dict[str, re.Pattern[str]]:
    """Compile ``{document_type: regex}`` entries, dropping invalid ones."""
    if not isinstance(value, dict):
        return {}
    patterns: dict[str, re.Pattern[str]] = {}
    for document_type, source in value.items():
        if not isinstance(document_type, str) or not isinstance(source, str):
            continue
        try:
            patterns[document_type.strip().lower()] = re.compile(source)
        except re.error as exc:
            logger.warning("Ignoring invalid validity pattern for %s: %s", document_type, exc)
    return patterns


def settings_from_config(data: dict[str, object]) -> Settings:
    use_overlay = data.get("use_overlay_strategy")
    return Settings(
        use_overlay_strategy=use_overlay if isinstance(use_overlay, bool) else True,
        lines_kept_from_top=_coerce_nonnegative_int(data.get("lines_kept_from_top")),
        lines_kept_from_bottom=_coerce_nonnegative_int(data.get("lines_kept_from_bottom")),
        excluded_path_globs=_coerce_globs(data.get("excluded_path_globs")),
        idle_refresh_seconds=_coerce_positive_float(
            data.get("idle_refresh_seconds"), DEFAULT_IDLE_REFRESH_SECONDS
        ),
        validity_patterns=_coerce_patterns(data.get("validity_patterns")),
    )


def load_settings() -> Settings:
    """Load sanitized settings from the persisted config."""
    return settings_from_config(load_config())


def save_truncation(keep_from_top: int, keep_from_bottom: int) -> None:
    """Persist truncation budgets, clamped to non-negative values."""
    config = load_config()
    config["lines_kept_from_top"] = max(0, int(keep_from_top))
    config["lines_kept_from_bottom"] = max(0, int(keep_from_bottom))
    save_config(config)


def save_excluded_path_globs(globs: list[str]) -> None:
    config = load_config()
    config["excluded_path_globs"] = [glob for glob in globs if glob.strip()]
    save_config(config)
