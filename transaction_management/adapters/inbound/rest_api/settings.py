from typing import List, Literal, Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
AllowedMethod = Union[HTTPMethod, Literal["*"]]


class FastAPIServerSettings(BaseSettings):
    """ Read from FASTAPI_SERVER_* variables, or FASTAPI_SERVER__* when nested into ServiceSettings """
    model_config = SettingsConfigDict(env_prefix="FASTAPI_SERVER_", extra="ignore")

    host: str = "0.0.0.0"
    port: int = Field(default=8000, gt=0, lt=65536)
    title: str = "Transaction Management"
    description: str = "Customers API with one shared transaction per request"
    origins: List[str] = Field(default_factory=lambda: ["*"])
    allow_methods: List[AllowedMethod] = Field(default_factory=lambda: ["*"])
    allow_headers: List[str] = Field(default_factory=lambda: ["*"])
