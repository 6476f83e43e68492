from collections.abc import AsyncIterator
from typing import AsyncGenerator
from unittest import mock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from ai.vector_store import RetrievedDocument
from api.dependencies import chat
from main import app
from tests.helpers import ANSWER, STREAM_CHUNKS, SYSTEM_PROMPT, count_words
from usecases import ChatUsecase


@pytest.fixture
def model_requests() -> list[list[ModelMessage]]:
    return []


@pytest.fixture
def function_model(model_requests: list[list[ModelMessage]]) -> FunctionModel:
    def answer(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        model_requests.append(messages)
        return ModelResponse(parts=[TextPart(content=ANSWER)])

    async def stream_answer(
        messages: list[ModelMessage], info: AgentInfo
    ) -> AsyncIterator[str]:
        model_requests.append(messages)
        for chunk in STREAM_CHUNKS:
            yield chunk

    return FunctionModel(function=answer, stream_function=stream_answer)


@pytest.fixture
def vector_store() -> mock.AsyncMock:
    store = mock.AsyncMock()
    store.similarity_search.return_value = [
        RetrievedDocument(source="guide.pdf", content="Stretch\nbefore running.")
    ]
    return store


@pytest.fixture
def chat_usecase(
    function_model: FunctionModel, vector_store: mock.AsyncMock
) -> ChatUsecase:
    return ChatUsecase(
        model=function_model,
        vector_store=vector_store,
        token_model="gpt-4o-mini",
        system_prompt=SYSTEM_PROMPT,
        counter=count_words,
    )


@pytest_asyncio.fixture(scope="function")
async def test_client(chat_usecase: ChatUsecase) -> AsyncGenerator[AsyncClient, None]:
    def override_get_chat_usecase() -> ChatUsecase:
        return chat_usecase

    app.dependency_overrides[chat.get_chat_usecase] = override_get_chat_usecase

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
