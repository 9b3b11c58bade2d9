"""Configuration management for the TeamsBot messaging extension.

Uses Pydantic Settings for type-safe, environment-based configuration.
"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv(override=True)

# Image used by the CreateAvenger command for every composed card.
DEFAULT_PLACEHOLDER_IMAGE_URL = (
    "https://res.cloudinary.com/teepublic/image/private/s--s0r6TuRK--/c_crop,x_10,y_10/c_fit,h_995/"
    "c_crop,g_north_west,h_1260,w_1008,x_-157,y_-192/co_rgb:0c3052,e_colorize,u_Misc:One%20Pixel%20Gray/"
    "c_scale,g_north_west,h_1260,w_1008/fl_layer_apply,g_north_west,x_-157,y_-192/bo_126px_solid_white/"
    "e_overlay,fl_layer_apply,h_1260,l_Misc:Art%20Print%20Bumpmap,w_1008/e_shadow,x_6,y_6/"
    "c_limit,h_1134,w_1134/c_lpad,g_center,h_1260,w_1260/b_rgb:eeeeee/c_limit,f_jpg,h_630,q_90,w_630/"
    "v1481201499/production/designs/923008_1.jpg"
)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App configuration
    app_name: str = Field("TeamsBot", alias="TEAMSBOT_APP_NAME")
    debug: bool = Field(False, alias="TEAMSBOT_DEBUG")
    version: str = Field("0.1.0", alias="TEAMSBOT_APP_VERSION")

    # API configuration
    api_prefix: str = "/api"
    api_host: str = Field("127.0.0.1", alias="TEAMSBOT_API_HOST")
    api_port: int = Field(3978, alias="TEAMSBOT_API_PORT")
    environment: str = Field("development", alias="TEAMSBOT_ENVIRONMENT")
    reload: bool = Field(False, alias="TEAMSBOT_RELOAD")

    # Character data source (read-only JSON document)
    data_file: str = Field("./data/avengers.json", alias="TEAMSBOT_DATA_FILE")
    # Load the record store during application startup instead of on first query
    preload_store: bool = Field(True, alias="TEAMSBOT_PRELOAD_STORE")

    # CreateAvenger command
    placeholder_image_url: str = Field(DEFAULT_PLACEHOLDER_IMAGE_URL, alias="TEAMSBOT_PLACEHOLDER_IMAGE_URL")

    # Logging configuration
    log_level: str = Field("INFO", alias="TEAMSBOT_LOG_LEVEL")
    log_format: str = Field("text", alias="TEAMSBOT_LOG_FORMAT")  # text or json

    @staticmethod
    def _repo_root_from_this_file() -> Path:
        """Resolve repository root for both local and container layouts.

        - Local dev: <repo>/backend/src/teamsbot/core/config.py -> repo root = <repo>
        - Container: /app/src/teamsbot/core/config.py -> repo root = /app
        """
        here = Path(__file__).resolve()
        src_dir = here.parents[2]  # .../src
        candidate_parent = src_dir.parent  # repo/app or backend
        return candidate_parent.parent if candidate_parent.name == "backend" else candidate_parent

    @field_validator("data_file", mode="before")
    @classmethod
    def _resolve_data_file(cls, v: str) -> str:
        p = Path(v)
        if p.is_absolute():
            return str(p)
        root = cls._repo_root_from_this_file()
        return str((root / p).resolve())

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("placeholder_image_url")
    @classmethod
    def validate_placeholder_image_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("placeholder_image_url must not be empty")
        return v.strip()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


def get_settings() -> Settings:
    """Build a fresh settings instance from the environment."""
    return Settings()  # type: ignore[call-arg]


# Global settings instance - will be created when first accessed
settings = None


def get_settings_instance() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global settings  # noqa: PLW0603
    if settings is None:
        settings = get_settings()
    return settings
