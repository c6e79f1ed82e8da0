"""
Configuration management for Server Status Board.

Loads configuration from:
1. YAML file (settings.yaml) - servers, embed look, intervals, logging
2. Environment variables - secrets (Discord bot token)

Environment variables take precedence over YAML for any overlapping settings.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field

import yaml
from matplotlib.colors import is_color_like


logger = logging.getLogger(__name__)


# =============================================================================
# Default configuration values
# =============================================================================

DEFAULT_PORT = 25565
DEFAULT_CHART_COLOR = "#3498db"
DEFAULT_HISTORY_HOURS = 24
DISPLAY_TYPES = ("chart", "basic")

DEFAULT_CONFIG = {
    "embed": {
        "title": "Minecraft Server Status",
        "footer": "Server Status Bot",
        "colors": {
            "online": "#2ecc71",
            "offline": "#e74c3c",
        },
    },
    "status_api": {
        "base_url": "https://api.mcstatus.io/v2",
        "timeout_seconds": 10,
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
    "servers": [],
}


def parse_color(value: str | int) -> int:
    """
    Convert a colour setting to a Discord colour integer.

    Accepts ints, "#rrggbb", "0xrrggbb" and bare hex strings.

    Raises:
        ValueError: If the value is not a valid 24-bit colour
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid colour: {value!r}")
    if isinstance(value, int):
        color = value
    else:
        text = str(value).strip().lower()
        if text.startswith("#"):
            text = text[1:]
        elif text.startswith("0x"):
            text = text[2:]
        color = int(text, 16)
    if not 0 <= color <= 0xFFFFFF:
        raise ValueError(f"Colour out of range: {value!r}")
    return color


def normalize_chart_color(value: str | int) -> str:
    """
    Convert a chart colour setting to something matplotlib can draw.

    Colours matplotlib already knows ("orange", "#3498db") are kept as
    written. Other forms accepted by parse_color(), such as ints, "0x3498db"
    and bare hex, become "#rrggbb".

    Raises:
        ValueError: If matplotlib cannot draw the colour
    """
    if isinstance(value, str) and is_color_like(value.strip()):
        return value.strip()
    try:
        return f"#{parse_color(value):06x}"
    except ValueError:
        raise ValueError(f"Invalid chart colour: {value!r}") from None


_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _as_bool(value, name: str) -> bool:
    """Strict boolean parsing for YAML/env values ("false" is False)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be true or false, got {value!r}")


# =============================================================================
# Data classes for typed configuration
# =============================================================================

@dataclass(frozen=True)
class ChartConfig:
    """Player chart settings for a single server."""
    enabled: bool = False
    color: str = DEFAULT_CHART_COLOR
    history_hours: int = DEFAULT_HISTORY_HOURS

    @classmethod
    def from_dict(cls, data: dict | None) -> "ChartConfig":
        data = data or {}
        unknown = set(data) - {"enabled", "color", "history_hours"}
        if unknown:
            raise ValueError(f"Unknown chart settings: {', '.join(sorted(unknown))}")
        return cls(
            enabled=_as_bool(data.get("enabled", False), "chart.enabled"),
            color=normalize_chart_color(data.get("color", DEFAULT_CHART_COLOR)),
            history_hours=int(data.get("history_hours", DEFAULT_HISTORY_HOURS)),
        )


@dataclass(frozen=True)
class DisplayConfig:
    """How a server's status message is presented."""
    type: str = "basic"
    show_next_update: bool = False
    chart: ChartConfig = field(default_factory=ChartConfig)

    @property
    def chart_enabled(self) -> bool:
        """True when this server's message should carry a player chart."""
        return self.type == "chart" and self.chart.enabled

    @classmethod
    def from_dict(cls, data: dict | None) -> "DisplayConfig":
        data = data or {}
        return cls(
            type=str(data.get("type", "basic")).lower(),
            show_next_update=_as_bool(data.get("show_next_update", False), "display.show_next_update"),
            chart=ChartConfig.from_dict(data.get("chart")),
        )


@dataclass(frozen=True)
class ServerConfig:
    """A monitored game server."""
    name: str
    address: str
    channel_id: str
    port: int = DEFAULT_PORT
    update_interval_ms: int = 60000
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @property
    def key(self) -> str:
        """Identity used for history, tracked messages and scheduler jobs."""
        return f"{self.address}:{self.port}@{self.channel_id}"

    @property
    def update_interval_seconds(self) -> float:
        return self.update_interval_ms / 1000

    @classmethod
    def from_dict(cls, data: dict) -> "ServerConfig":
        return cls(
            name=str(data.get("name", data.get("address", ""))),
            address=str(data.get("address", "")),
            channel_id=str(data.get("channel_id", "")),
            port=int(data.get("port", DEFAULT_PORT)),
            update_interval_ms=int(data.get("update_interval_ms", 60000)),
            display=DisplayConfig.from_dict(data.get("display")),
        )


@dataclass
class EmbedColorsConfig:
    """Embed colours keyed by server state."""
    online: str | int = "#2ecc71"
    offline: str | int = "#e74c3c"


@dataclass
class EmbedConfig:
    """Shared look of every status message."""
    title: str = "Minecraft Server Status"
    footer: str = "Server Status Bot"
    colors: EmbedColorsConfig = field(default_factory=EmbedColorsConfig)

    @property
    def online_color(self) -> int:
        return parse_color(self.colors.online)

    @property
    def offline_color(self) -> int:
        return parse_color(self.colors.offline)

    @classmethod
    def from_dict(cls, data: dict) -> "EmbedConfig":
        return cls(
            title=data.get("title", DEFAULT_CONFIG["embed"]["title"]),
            footer=data.get("footer", DEFAULT_CONFIG["embed"]["footer"]),
            colors=EmbedColorsConfig(**data.get("colors", {})),
        )


@dataclass
class StatusApiConfig:
    """Status lookup API settings."""
    base_url: str = "https://api.mcstatus.io/v2"
    timeout_seconds: int = 10


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# =============================================================================
# Main configuration class
# =============================================================================

@dataclass
class Config:
    """
    Main configuration container.

    Loads from YAML file and environment variables.
    Environment variables take precedence.
    """

    # Required
    discord_token: str = ""

    # Sub-configurations
    embed: EmbedConfig = field(default_factory=EmbedConfig)
    status_api: StatusApiConfig = field(default_factory=StatusApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    servers: list[ServerConfig] = field(default_factory=list)

    def validate(self) -> list[str]:
        """
        Validate the configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.discord_token:
            errors.append("DISCORD_TOKEN is required")

        for name in ("online", "offline"):
            try:
                parse_color(getattr(self.embed.colors, name))
            except (TypeError, ValueError):
                errors.append(f"Embed colour '{name}' is not a valid colour")

        if not self.servers:
            errors.append("At least one server must be configured")

        seen: set[str] = set()
        for index, server in enumerate(self.servers):
            label = server.name or f"servers[{index}]"
            if not server.address:
                errors.append(f"Server {label}: address is required")
            if not server.channel_id:
                errors.append(f"Server {label}: channel_id is required")
            if not 1 <= server.port <= 65535:
                errors.append(f"Server {label}: port {server.port} must be between 1 and 65535")
            if server.update_interval_ms <= 0:
                errors.append(f"Server {label}: update_interval_ms must be positive")
            if server.display.type not in DISPLAY_TYPES:
                errors.append(f"Server {label}: display type must be one of: {', '.join(DISPLAY_TYPES)}")
            if server.display.chart.history_hours < 1:
                errors.append(f"Server {label}: chart history_hours must be at least 1")
            if not is_color_like(server.display.chart.color):
                errors.append(f"Server {label}: chart color is not a valid colour")
            if server.key in seen:
                errors.append(f"Server {label}: duplicate server {server.key}")
            seen.add(server.key)

        return errors


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from 'override' take precedence over 'base'.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_config(config_path: Path) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
            return config if config else {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML config: {e}")
        return {}


def load_config(config_dir: Path | str | None = None) -> Config:
    """
    Load configuration from YAML file and environment variables.

    Args:
        config_dir: Directory containing settings.yaml.
                   Defaults to $CONFIG_DIR, /app/config or ./config

    Returns:
        Fully loaded and merged Config object

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # Determine config directory
    if config_dir is None:
        if os.getenv("CONFIG_DIR"):
            config_dir = Path(os.environ["CONFIG_DIR"])
        elif Path("/app/config").exists():
            config_dir = Path("/app/config")
        else:
            config_dir = Path("./config")
    else:
        config_dir = Path(config_dir)

    yaml_path = config_dir / "settings.yaml"
    yaml_config = _load_yaml_config(yaml_path)

    merged_config = _deep_merge(DEFAULT_CONFIG, yaml_config)

    try:
        config = Config(
            discord_token=os.getenv("DISCORD_TOKEN", ""),
            embed=EmbedConfig.from_dict(merged_config.get("embed", {})),
            status_api=StatusApiConfig(**merged_config.get("status_api", {})),
            logging=LoggingConfig(**merged_config.get("logging", {})),
            servers=[ServerConfig.from_dict(s) for s in merged_config.get("servers") or []],
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        raise ValueError(f"Invalid configuration: {e}") from e

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    logger.info(f"Configuration loaded successfully ({len(config.servers)} servers)")
    return config


def setup_logging(config: Config) -> None:
    """
    Set up logging based on configuration.

    Args:
        config: Loaded configuration object
    """
    level = getattr(logging, config.logging.level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=config.logging.format,
        handlers=[
            logging.StreamHandler(),
        ]
    )

    # Reduce noise from external libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    logger.info(f"Logging configured at {config.logging.level} level")
