"""Application configuration for the battlepass tracker."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CLIENT_PLATFORM = (
    "ew0KCSJwbGF0Zm9ybVR5cGUiOiAiUEMiLA0KCSJwbGF0Zm9ybU9TIjogIldpbmRvd3MiLA0KCSJwbGF0Zm9ybU9TVmVyc2lvbiI6ICIxMC4wLjE5MDQyLjEuMjU2LjY0Yml0IiwNCgkicGxhdGZvcm1DaGlwc2V0IjogIlVua25vd24iDQp9"
)


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BATTLEPASS_",
        extra="allow",
        populate_by_name=True,
    )

    # General
    log_level: str = "WARNING"

    # Local files
    cache_path: str = "config.yaml"
    error_log_path: str = "error.log"
    local_app_data: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BATTLEPASS_LOCAL_APP_DATA", "LOCALAPPDATA"),
        description="Directory holding the game client's local data",
    )
    shooter_log_relpath: str = "VALORANT/Saved/Logs/ShooterGame.log"
    riot_settings_relpath: str = "Riot Games/Riot Client/Data/RiotGamesPrivateSettings.yaml"

    # Identity services
    version_url: str = "https://valorant-api.com/v1/version"
    authorize_url: str = "https://auth.riotgames.com/authorize"
    auth_redirect_uri: str = "https://playvalorant.com/opt_in"
    auth_client_id: str = "play-valorant-web-prod"
    userinfo_url: str = "https://auth.riotgames.com/userinfo"
    entitlements_url: str = "https://entitlements.auth.riotgames.com/api/token/v1"

    # Game data services
    pd_base_url_template: str = Field(
        default="https://pd.{shard}.a.pvp.net",
        description="Player data host, formatted with the shard id",
    )
    shared_base_url_template: str = Field(
        default="https://shared.{shard}.a.pvp.net",
        description="Shared content host, formatted with the shard id",
    )
    contract_definition_id: str = Field(
        default="07ba5d79-4245-03d8-7996-13baf5d08c1a",
        description="Contract definition of the current season's battlepass",
    )
    client_platform: str = CLIENT_PLATFORM
    user_agent: str = ""
    request_timeout_seconds: float = 30.0

    # Report
    timezone_offset_hours: int = 2

    @property
    def shooter_log_path(self) -> Path | None:
        if not self.local_app_data:
            return None
        return Path(self.local_app_data) / self.shooter_log_relpath

    @property
    def riot_settings_path(self) -> Path | None:
        if not self.local_app_data:
            return None
        return Path(self.local_app_data) / self.riot_settings_relpath


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
