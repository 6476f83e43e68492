from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ai.prompts import SYSTEM_PROMPT
from constants import DEFAULT_N_RESULTS, DEFAULT_TOKEN_LIMIT

from .base import BaseSettings


class CoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="core_")

    token_limit: int = Field(
        default=DEFAULT_TOKEN_LIMIT, gt=0, title="Prompt token budget"
    )
    n_results: int = Field(
        default=DEFAULT_N_RESULTS, ge=0, title="Number of retrieved passages"
    )
    system_prompt: str = Field(default=SYSTEM_PROMPT, title="System prompt")


core_settings = CoreSettings()
