from pydantic import Field
from pydantic_settings import SettingsConfigDict

from constants import COGNITIVE_SERVICES_SCOPE, DUMMY_TOKEN
from settings.base import BaseSettings


class AzureSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="azure_")

    scope: str = Field(default=COGNITIVE_SERVICES_SCOPE, title="Token scope")
    allow_dummy_token: bool = Field(
        default=False,
        title="Fall back to a dummy token when no credential is available",
    )
    dummy_token: str = Field(default=DUMMY_TOKEN, title="Dummy token value")


azure_settings = AzureSettings()
