"""Configuration management for ticklist."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TICKLIST_HOME = Path(os.environ.get("TICKLIST_HOME", Path.home() / ".ticklist"))
CONFIG_FILE = TICKLIST_HOME / "config" / "ticklist.conf"
DATA_DIR = TICKLIST_HOME / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """ticklist configuration."""

    data_file: Path = field(default_factory=lambda: DATA_DIR / "tasks.json")
    date_format: str = "%a %b %d"
    complete_icon: str = "[x]"
    incomplete_icon: str = "[ ]"
    repeats_icon: str = "(r)"
    show_complete: bool = False
    default_format: str = "plain"

    def complete_icon_for(self, complete: bool) -> str:
        return self.complete_icon if complete else self.incomplete_icon


def _parse_value(raw: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    value = raw.strip()
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    logger.warning(f"Ignoring invalid boolean for {key.upper()}: {value!r}")
    return default


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from ticklist.conf file."""
    config_file = config_file or CONFIG_FILE
    config = Config()

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, raw = line.partition("=")
        key = key.strip().lower()
        value = _parse_value(raw)

        match key:
            case "data_file":
                config.data_file = Path(value).expanduser()
            case "date_format":
                config.date_format = value
            case "complete_icon":
                config.complete_icon = value
            case "incomplete_icon":
                config.incomplete_icon = value
            case "repeats_icon":
                config.repeats_icon = value
            case "show_complete":
                config.show_complete = _parse_bool(key, value, config.show_complete)
            case "default_format":
                if value in ("plain", "json"):
                    config.default_format = value
                else:
                    logger.warning(f"Ignoring unknown DEFAULT_FORMAT: {value!r}")
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config


def save_setting(key: str, value: str, config_file: Path | None = None) -> None:
    """Set one key in ticklist.conf, replacing an existing line or appending."""
    config_file = config_file or CONFIG_FILE
    key_upper = key.upper()
    new_line = f'{key_upper} = "{value}"'

    lines = config_file.read_text().splitlines() if config_file.exists() else []
    replaced = False
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("#") or "=" not in stripped:
            continue
        if stripped.partition("=")[0].strip().lower() == key.lower():
            lines[i] = new_line
            replaced = True
            break

    if not replaced:
        lines.append(new_line)

    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text("\n".join(lines) + "\n")
    logger.debug(f"Saved {key_upper} to {config_file}")
