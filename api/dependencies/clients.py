from functools import lru_cache

from azure.identity.aio import DefaultAzureCredential
from fastembed import TextEmbedding
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings
from qdrant_client import AsyncQdrantClient

from ai.credentials import BearerTokenProvider
from ai.model import get_model
from ai.vector_store import QdrantVectorStore
from settings import azure_settings, openai_settings, qdrant_settings


@lru_cache(maxsize=1)
def get_token_provider() -> BearerTokenProvider:
    """Get the Azure AD token provider.

    Uses ``az login`` or ``azd auth login`` locally and the managed
    identity when deployed.

    Returns:
        The token provider.

    """
    return BearerTokenProvider(
        credential=DefaultAzureCredential(),
        scope=azure_settings.scope,
        allow_dummy_token=azure_settings.allow_dummy_token,
        dummy_token=azure_settings.dummy_token,
    )


@lru_cache(maxsize=1)
def get_chat_model() -> tuple[Model, ModelSettings]:
    """Get the chat model and its settings.

    Returns:
        The model and settings.

    """
    return get_model(
        settings=openai_settings,
        token_provider=None if openai_settings.api_key else get_token_provider(),
    )


@lru_cache(maxsize=1)
def get_vector_store() -> QdrantVectorStore:
    """Get the vector store.

    Returns:
        The vector store.

    """
    embedder = (
        TextEmbedding(model_name=qdrant_settings.embedding_model)
        if qdrant_settings.embedding_model
        else TextEmbedding()
    )
    return QdrantVectorStore(
        client=AsyncQdrantClient(host=qdrant_settings.host, port=qdrant_settings.port),
        embedder=embedder,
        collection=qdrant_settings.collection,
    )


async def close_clients() -> None:
    """Close the clients that were created, then drop them from the cache."""
    if get_vector_store.cache_info().currsize:
        await get_vector_store().close()
    if get_token_provider.cache_info().currsize:
        await get_token_provider().close()

    get_chat_model.cache_clear()
    get_vector_store.cache_clear()
    get_token_provider.cache_clear()
