from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from transaction_management.adapters.inbound.rest_api.settings import FastAPIServerSettings


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore",
                                      env_nested_delimiter="__",
                                      env_file_encoding='utf-8',
                                      env_file=Path(__file__).parent.parent.joinpath('.env'), )
    fastapi_server: FastAPIServerSettings = Field(default_factory=FastAPIServerSettings)

    database_uri: str = "sqlite+aiosqlite:///./customers.db"
    database_echo: bool = False
    initialize_database: bool = True
    log_level: str = "INFO"
