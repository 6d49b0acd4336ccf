"""Unified service configuration.

Uses pydantic-settings ``BaseSettings`` sub-configs grouped under a top-level
``AppConfig``.  Every value can be overridden with an env var using the
section's prefix (``ASSETHUB_ASSETS_PEXELS_API_KEY=...``); otherwise the field
default applies.

Call ``reload_config()`` after changing the environment to rebuild the
in-memory singleton.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

# Re-export validators so ``from assethub.config import str_limit`` works.
from assethub.validators import str_limit, check_mime  # noqa: F401


class _EnvSettings(BaseSettings):
    """Base for all sub-configs: init kwargs > env vars > defaults."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings)


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class LimitsConfig(_EnvSettings):
    model_config = {"env_prefix": "ASSETHUB_LIMIT_"}

    # --- Search ---
    query_max: int = 200

    # --- Profiles ---
    name_max: int = 64
    avatar_max: int = 512

    # --- Downloads ---
    filename_max: int = 255

    # --- Requests ---
    max_request_body: int = 64 * 1024  # 64 KB


class ServerIdentityConfig(_EnvSettings):
    model_config = {"env_prefix": "ASSETHUB_SERVER_"}

    name: str = "AssetHub"


class AuthConfig(_EnvSettings):
    model_config = {"env_prefix": "ASSETHUB_AUTH_"}

    provider_url: str | None = None  # e.g. https://<project>.supabase.co
    service_key: str | None = None
    timeout: float = 10.0
    token_cache_ttl: float = 30.0  # seconds


class AssetsConfig(_EnvSettings):
    model_config = {"env_prefix": "ASSETHUB_ASSETS_"}

    unsplash_access_key: str | None = None
    pexels_api_key: str | None = None
    timeout: float = 10.0
    lorem_picsum_enabled: bool = False
    download_max_bytes: int = 25 * 1024 * 1024  # 25 MB
    allowed_download_mimes: str = "image/*"
    user_agent: str = "AssetHub/1.0"


# ---------------------------------------------------------------------------
# Top-level AppConfig
# ---------------------------------------------------------------------------

_SECTIONS: dict[str, type[BaseSettings]] = {
    "server": ServerIdentityConfig,
    "auth": AuthConfig,
    "assets": AssetsConfig,
    "limits": LimitsConfig,
}


class AppConfig(BaseModel):
    server: ServerIdentityConfig = ServerIdentityConfig()
    auth: AuthConfig = AuthConfig()
    assets: AssetsConfig = AssetsConfig()
    limits: LimitsConfig = LimitsConfig()


# Module-level singleton
config = AppConfig()


def _reload_section(section_name: str) -> None:
    """Rebuild a single sub-config from env."""
    setattr(config, section_name, _SECTIONS[section_name]())


def reload_config() -> None:
    """Rebuild all sub-configs from env + defaults."""
    for section_name in _SECTIONS:
        _reload_section(section_name)
