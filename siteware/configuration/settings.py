from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServeSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SITEWARE_", case_sensitive=False)

    bind_host: str = "127.0.0.1"
    bind_port: int = 8080
