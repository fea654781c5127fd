"""Configuration and path resolution for tro."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from tro.errors import ConfigError

DEFAULT_HOST = "https://api.trello.com"
DEFAULT_TIMEOUT = 30.0


@dataclass(slots=True)
class TroPaths:
    """Resolved filesystem paths used by tro.

    Attributes:
        config_dir: Directory holding tro configuration.
        config_path: TOML configuration file path.
    """

    config_dir: Path
    config_path: Path


@dataclass(slots=True)
class TroConfig:
    """Runtime configuration passed to the client and commands.

    Attributes:
        host: Trello API base URL.
        token: Trello API token.
        key: Trello API key.
        timeout: Per-request timeout in seconds.
        editor: Editor command overriding $VISUAL/$EDITOR when set.
    """

    host: str
    token: str
    key: str
    timeout: float = DEFAULT_TIMEOUT
    editor: str | None = None


def default_config_dir() -> Path:
    """Return the platform-aware default tro configuration directory."""
    override = os.environ.get("TRO_CONFIG_DIR")
    if override:
        return Path(override).expanduser().resolve()

    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "tro"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tro"
    return Path.home() / ".config" / "tro"


def resolve_paths() -> TroPaths:
    """Resolve tro configuration paths."""
    config_dir = default_config_dir()
    return TroPaths(config_dir=config_dir, config_path=config_dir / "config.toml")


def load_config(paths: TroPaths | None = None) -> TroConfig:
    """Load runtime configuration from config.toml.

    Args:
        paths: Optional pre-resolved tro paths.

    Returns:
        Configuration with defaults applied for optional fields.

    Raises:
        ConfigError: If the file is missing, unparsable or has invalid values.
    """
    resolved = paths or resolve_paths()
    if not resolved.config_path.exists():
        raise ConfigError(
            f"Config file not found: {resolved.config_path}. "
            "Create it with 'token' and 'key' entries from https://trello.com/app-key."
        )

    raw = resolved.config_path.read_text(encoding="utf-8")
    try:
        parsed = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config TOML: {resolved.config_path}") from exc

    token = _parse_str(parsed.get("token"), default=None, field_name="token")
    key = _parse_str(parsed.get("key"), default=None, field_name="key")
    if not token or not key:
        raise ConfigError(
            f"Config file {resolved.config_path} must define both 'token' and 'key'."
        )
    host = _parse_str(parsed.get("host"), default=DEFAULT_HOST, field_name="host")
    editor = _parse_str(parsed.get("editor"), default=None, field_name="editor")
    timeout = _parse_timeout(parsed.get("timeout"), default=DEFAULT_TIMEOUT)
    return TroConfig(
        host=(host or DEFAULT_HOST).rstrip("/"),
        token=token,
        key=key,
        timeout=timeout,
        editor=editor or None,
    )


def _parse_str(value, default: str | None, field_name: str) -> str | None:
    """Parse optional string config value with validation."""
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"Config field {field_name} must be a string.")
    return value.strip()


def _parse_timeout(value, default: float) -> float:
    """Parse optional positive timeout, accepting integers and floats."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigError("Config field timeout must be a number.")
    if value <= 0:
        raise ConfigError("Config field timeout must be greater than zero.")
    return float(value)
