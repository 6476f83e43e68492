import asyncio
from collections.abc import AsyncIterator
from unittest import mock

import httpx
import pytest
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from enums import Role
from exceptions import ChatGenerationError, RetrievalError
from schemas import ChatMessage
from tests.helpers import ANSWER, STREAM_CHUNKS, SYSTEM_PROMPT, count_words
from usecases import ChatUsecase

QUESTION = ChatMessage(role=Role.USER, content="How should I warm up?")


def failing_model() -> FunctionModel:
    def fail(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        raise ModelHTTPError(status_code=500, model_name="gpt-4o-mini")

    return FunctionModel(function=fail)


def failing_stream_model() -> FunctionModel:
    async def fail_after_first_chunk(
        messages: list[ModelMessage], info: AgentInfo
    ) -> AsyncIterator[str]:
        yield "partial "
        raise ModelHTTPError(status_code=500, model_name="gpt-4o-mini")

    return FunctionModel(stream_function=fail_after_first_chunk)


class TestChatUsecaseRun:
    @pytest.mark.asyncio
    async def test_ok(
        self,
        chat_usecase: ChatUsecase,
        vector_store: mock.AsyncMock,
        model_requests: list[list[ModelMessage]],
    ) -> None:
        completion = await chat_usecase.run(messages=[QUESTION])

        assert completion.message == ChatMessage(role=Role.ASSISTANT, content=ANSWER)
        assert completion.context.data_points == [
            "guide.pdf: Stretch before running."
        ]
        assert completion.context.thoughts.startswith(
            "Search query:<br>How should I warm up?<br><br>Conversation:<br>"
        )
        assert "\n" not in completion.context.thoughts
        vector_store.similarity_search.assert_awaited_once_with(
            query="How should I warm up?", limit=3
        )

        [messages] = model_requests
        assert isinstance(messages[0], ModelRequest)
        assert isinstance(messages[0].parts[0], SystemPromptPart)
        assert messages[0].parts[0].content == SYSTEM_PROMPT
        assert isinstance(messages[-1], ModelRequest)
        assert messages[-1].parts[0].content == (
            "How should I warm up?\n\nSources:\nguide.pdf: Stretch before running."
        )

    @pytest.mark.asyncio
    async def test_history_is_chronological(
        self,
        chat_usecase: ChatUsecase,
        model_requests: list[list[ModelMessage]],
    ) -> None:
        history = [
            ChatMessage(role=Role.USER, content="Hi"),
            ChatMessage(role=Role.ASSISTANT, content="Hello, how can I help?"),
        ]

        await chat_usecase.run(messages=[*history, QUESTION])

        [messages] = model_requests
        assert len(messages) == 4
        assert isinstance(messages[1].parts[0], UserPromptPart)
        assert messages[1].parts[0].content == "Hi"
        assert isinstance(messages[2], ModelResponse)
        assert messages[2].parts[0].content == "Hello, how can I help?"

    @pytest.mark.asyncio
    async def test_history_is_truncated(
        self,
        function_model: FunctionModel,
        vector_store: mock.AsyncMock,
        model_requests: list[list[ModelMessage]],
    ) -> None:
        # system: 4 words, question with sources: 10 words
        usecase = ChatUsecase(
            model=function_model,
            vector_store=vector_store,
            token_model="gpt-4o-mini",
            system_prompt=SYSTEM_PROMPT,
            token_limit=15,
            counter=count_words,
        )
        history = [
            ChatMessage(role=Role.USER, content="one two"),
            ChatMessage(role=Role.ASSISTANT, content="three"),
        ]

        await usecase.run(messages=[*history, QUESTION])

        [messages] = model_requests
        assert len(messages) == 3
        assert isinstance(messages[1], ModelResponse)
        assert messages[1].parts[0].content == "three"

    @pytest.mark.asyncio
    async def test_retrieval_error(
        self, chat_usecase: ChatUsecase, vector_store: mock.AsyncMock
    ) -> None:
        vector_store.similarity_search.side_effect = httpx.ConnectError("refused")

        with pytest.raises(RetrievalError):
            await chat_usecase.run(messages=[QUESTION])

    @pytest.mark.asyncio
    async def test_generation_error(self, vector_store: mock.AsyncMock) -> None:
        usecase = ChatUsecase(
            model=failing_model(),
            vector_store=vector_store,
            token_model="gpt-4o-mini",
            counter=count_words,
        )

        with pytest.raises(ChatGenerationError):
            await usecase.run(messages=[QUESTION])


class TestChatUsecaseStreaming:
    @pytest.mark.asyncio
    async def test_ok(self, chat_usecase: ChatUsecase) -> None:
        chunks = [
            chunk
            async for chunk in await chat_usecase.run_with_streaming(
                messages=[QUESTION]
            )
        ]

        first, *rest = chunks
        assert first.delta.role == Role.ASSISTANT
        assert first.context is not None
        assert first.context.data_points == ["guide.pdf: Stretch before running."]
        assert "".join(chunk.delta.content or "" for chunk in rest) == "".join(
            STREAM_CHUNKS
        )
        assert all(chunk.context is None for chunk in rest)

    @pytest.mark.asyncio
    async def test_retrieval_error_before_streaming(
        self, chat_usecase: ChatUsecase, vector_store: mock.AsyncMock
    ) -> None:
        vector_store.similarity_search.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(RetrievalError):
            await chat_usecase.run_with_streaming(messages=[QUESTION])

    @pytest.mark.asyncio
    async def test_closing_stream_stops_generation(
        self, chat_usecase: ChatUsecase
    ) -> None:
        chunks = await chat_usecase.run_with_streaming(messages=[QUESTION])

        first = await anext(chunks)
        second = await anext(chunks)
        await chunks.aclose()

        assert first.delta.role == Role.ASSISTANT
        assert second.delta.content == STREAM_CHUNKS[0]
        with pytest.raises(StopAsyncIteration):
            await anext(chunks)

    @pytest.mark.asyncio
    async def test_generation_error_mid_stream(
        self, vector_store: mock.AsyncMock
    ) -> None:
        usecase = ChatUsecase(
            model=failing_stream_model(),
            vector_store=vector_store,
            token_model="gpt-4o-mini",
            counter=count_words,
        )
        chunks = await usecase.run_with_streaming(messages=[QUESTION])

        received = []
        with pytest.raises(ChatGenerationError):
            async for chunk in chunks:
                received.append(chunk)

        first, second = received
        assert first.delta.role == Role.ASSISTANT
        assert first.context is not None
        assert second.delta.content == "partial "
        assert second.context is None

    @pytest.mark.asyncio
    async def test_stream_closed_from_another_task(
        self, chat_usecase: ChatUsecase
    ) -> None:
        chunks = await chat_usecase.run_with_streaming(messages=[QUESTION])

        await asyncio.create_task(anext(chunks))
        second = await asyncio.create_task(anext(chunks))
        await asyncio.create_task(chunks.aclose())

        assert second.delta.content == STREAM_CHUNKS[0]
        with pytest.raises(StopAsyncIteration):
            await anext(chunks)
