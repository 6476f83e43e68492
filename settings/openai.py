from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class OpenAISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="openai_")

    endpoint: str = Field(
        default="http://localhost:4041", title="Azure OpenAI endpoint"
    )
    api_version: str = Field(default="2024-10-21", title="Azure OpenAI API version")
    model_name: str = Field(default="gpt-4o-mini", title="Chat deployment name")
    api_key: str = Field(default="", title="Azure OpenAI API key")
    temperature: float = Field(default=0.7, ge=0, le=2, title="Sampling temperature")
    max_tokens: int = Field(default=1024, gt=0, title="Max completion tokens")


openai_settings = OpenAISettings()
