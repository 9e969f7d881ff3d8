"""Root settings model for cafebot configuration.

The bot is configured in layers. ``config/default.toml`` describes the
whole bot (reply texts, recognizer patterns, canned QnA answers) and
``config/{CAFEBOT_ENV}.toml`` is laid over it; CAFEBOT_* environment
variables win over both.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from cafebot.config.models.api import APIConfig
from cafebot.config.models.dialogs import DialogsConfig
from cafebot.config.models.dispatch import DispatchConfig
from cafebot.config.models.observability import ObservabilityConfig
from cafebot.config.models.recognizer import RecognizerConfig
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_DIR_ENV = "CAFEBOT_CONFIG_DIR"
ENVIRONMENT_ENV = "CAFEBOT_ENV"
DEFAULT_ENVIRONMENT = "development"
BASE_LAYER = "default.toml"

# Module-level variable to store TOML config for settings source
_toml_config: dict[str, Any] = {}


class ConfigLayerError(ValueError):
    """An environment layer does not fit the shape of the base layer."""


def find_config_dir(start: Path | None = None) -> Path:
    """Locate the directory holding the bot's TOML layers.

    CAFEBOT_CONFIG_DIR wins. Otherwise the nearest ``config/`` directory
    holding ``default.toml``, from ``start`` (the working directory) up to
    the filesystem root.
    """
    configured = os.environ.get(CONFIG_DIR_ENV)
    if configured:
        path = Path(configured)
        if not path.is_dir():
            raise FileNotFoundError(f"{CONFIG_DIR_ENV} is not a directory: {configured}")
        return path

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "config"
        if (candidate / BASE_LAYER).is_file():
            return candidate
    raise FileNotFoundError(
        f"No config/{BASE_LAYER} found above {current}. Set {CONFIG_DIR_ENV}."
    )


def merge_layer(base: dict[str, Any], layer: dict[str, Any], path: str = "") -> dict[str, Any]:
    """Lay one TOML layer over another.

    Tables merge key by key, so an environment file can change one reply
    text, one QnA answer or one intent's patterns without restating the
    rest. Arrays and scalars are replaced whole. Keys keep the base order,
    which is the order ``[recognizer.patterns]`` tries intents in; keys only
    the layer names follow them.

    Raises:
        ConfigLayerError: If the layer swaps a table for a value or back
    """
    merged = dict(base)
    for key, value in layer.items():
        dotted = f"{path}.{key}" if path else key
        current = merged.get(key)
        if key in merged and isinstance(current, dict) != isinstance(value, dict):
            expected = "table" if isinstance(current, dict) else "value"
            raise ConfigLayerError(f"'{dotted}' must stay a {expected}")
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_layer(current, value, dotted)
        else:
            merged[key] = value
    return merged


def read_layer(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def load_layers(config_dir: Path | None = None, environment: str | None = None) -> dict[str, Any]:
    """Read ``default.toml`` and lay the environment file over it.

    The environment comes from CAFEBOT_ENV (default "development"); a
    missing environment file just means no overrides.
    """
    config_dir = config_dir if config_dir is not None else find_config_dir()
    environment = environment or os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)

    base_path = config_dir / BASE_LAYER
    if not base_path.is_file():
        raise FileNotFoundError(f"Base configuration not found: {base_path}")
    config = read_layer(base_path)

    env_path = config_dir / f"{environment}.toml"
    if env_path.is_file():
        config = merge_layer(config, read_layer(env_path))

    unknown = sorted(key for key in config if key not in Settings.model_fields)
    if unknown:
        logger.warning("unknown_config_keys", keys=unknown, config_dir=str(config_dir))
    logger.debug(
        "config_layers_loaded",
        config_dir=str(config_dir),
        environment=environment,
        environment_layer=env_path.is_file(),
    )
    return config


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the TOML config values."""
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{CAFEBOT_ENV}.toml (environment overrides)
    4. CAFEBOT_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="CAFEBOT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="cafebot", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Logging level")

    api: APIConfig = Field(default_factory=APIConfig, description="API server configuration")
    dispatch: DispatchConfig = Field(
        default_factory=DispatchConfig,
        description="Turn dispatch configuration",
    )
    dialogs: DialogsConfig = Field(
        default_factory=DialogsConfig,
        description="Built-in sub-conversation texts",
    )
    recognizer: RecognizerConfig = Field(
        default_factory=RecognizerConfig,
        description="Pattern recognizer configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include TOML config.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (CAFEBOT_* environment variables)
        3. toml_settings (config/*.toml files)
        4. (defaults from model)
        """
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
