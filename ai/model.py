from openai import AsyncAzureOpenAI
from pydantic_ai.models.openai import OpenAIChatModel, OpenAIChatModelSettings
from pydantic_ai.providers.openai import OpenAIProvider

from ai.credentials import BearerTokenProvider
from settings.openai import OpenAISettings


def get_model(
    settings: OpenAISettings, token_provider: BearerTokenProvider | None = None
) -> tuple[OpenAIChatModel, OpenAIChatModelSettings]:
    """Get the chat model.

    An API key takes precedence over the token provider.

    Args:
        settings: The OpenAI settings.
        token_provider: The Azure AD token provider.

    Returns:
        The model and settings.

    """
    if not settings.api_key and token_provider is None:
        msg = "Azure OpenAI API key or token provider is required"
        raise ValueError(msg)

    if settings.api_key:
        client = AsyncAzureOpenAI(
            azure_endpoint=settings.endpoint,
            api_version=settings.api_version,
            api_key=settings.api_key,
        )
    else:
        client = AsyncAzureOpenAI(
            azure_endpoint=settings.endpoint,
            api_version=settings.api_version,
            azure_ad_token_provider=token_provider,
        )

    return (
        OpenAIChatModel(
            model_name=settings.model_name,
            provider=OpenAIProvider(openai_client=client),
        ),
        OpenAIChatModelSettings(
            temperature=settings.temperature, max_tokens=settings.max_tokens
        ),
    )
