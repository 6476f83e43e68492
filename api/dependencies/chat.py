from typing import Annotated

from fastapi import Depends
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from ai.vector_store import QdrantVectorStore
from api.dependencies import clients
from settings import core_settings, openai_settings
from usecases import ChatUsecase


def get_chat_usecase(
    chat_model: Annotated[
        tuple[Model, ModelSettings], Depends(dependency=clients.get_chat_model)
    ],
    vector_store: Annotated[
        QdrantVectorStore, Depends(dependency=clients.get_vector_store)
    ],
) -> ChatUsecase:
    """Get the chat usecase.

    Args:
        chat_model: The chat model and its settings.
        vector_store: The vector store.

    Returns:
        The chat usecase.

    """
    model, model_settings = chat_model
    return ChatUsecase(
        model=model,
        model_settings=model_settings,
        vector_store=vector_store,
        token_model=openai_settings.model_name,
        system_prompt=core_settings.system_prompt,
        token_limit=core_settings.token_limit,
        n_results=core_settings.n_results,
    )
