from collections.abc import AsyncGenerator, AsyncIterator
from typing import Any

import httpx
import logfire
import openai
from pydantic_ai.exceptions import AgentRunError
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    PartDeltaEvent,
    PartStartEvent,
    SystemPromptPart,
    TextPart,
    TextPartDelta,
    UserPromptPart,
)
from pydantic_ai.models import Model, ModelRequestParameters
from pydantic_ai.settings import ModelSettings
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

from ai.message_builder import MessageBuilder, TokenCounter, build_messages
from ai.prompts import SYSTEM_PROMPT
from ai.tokenizer import count_message_tokens
from ai.vector_store import QdrantVectorStore
from constants import DEFAULT_N_RESULTS, DEFAULT_TOKEN_LIMIT, SOURCES_HEADER
from enums import Role
from exceptions import ChatGenerationError, RetrievalError
from schemas import (
    ChatCompletion,
    ChatCompletionDelta,
    ChatContext,
    ChatDelta,
    ChatMessage,
)

GENERATION_ERRORS = (AgentRunError, openai.APIError)
RETRIEVAL_ERRORS = (UnexpectedResponse, ResponseHandlingException, httpx.HTTPError)


class ChatUsecase:
    def __init__(
        self,
        model: Model,
        vector_store: QdrantVectorStore,
        token_model: str,
        model_settings: ModelSettings | None = None,
        system_prompt: str = SYSTEM_PROMPT,
        token_limit: int = DEFAULT_TOKEN_LIMIT,
        n_results: int = DEFAULT_N_RESULTS,
        counter: TokenCounter = count_message_tokens,
    ):
        self._model = model
        self._vector_store = vector_store
        self._model_settings = model_settings
        self.token_model = token_model
        self.system_prompt = system_prompt
        self.token_limit = token_limit
        self.n_results = n_results
        self._counter = counter

    async def search(self, query: str) -> list[str]:
        """Search the knowledge base.

        Args:
            query: The search query.

        Returns:
            The data points, one ``source: content`` line per passage.

        Raises:
            RetrievalError: If the vector store fails.

        """
        with logfire.span("similarity search", query=query, limit=self.n_results):
            try:
                documents = await self._vector_store.similarity_search(
                    query=query, limit=self.n_results
                )
            except RETRIEVAL_ERRORS as error:
                raise RetrievalError(message=f"Search failed: {error}") from error

        return [document.to_data_point() for document in documents]

    def build_prompt(
        self, messages: list[ChatMessage], data_points: list[str]
    ) -> MessageBuilder:
        """Build the prompt for the conversation.

        The last message is the question. The data points are injected into it.

        Args:
            messages: The conversation, oldest first.
            data_points: The retrieved data points.

        Returns:
            The message builder.

        """
        question = messages[-1].content
        sources = "\n".join(data_points)
        builder = build_messages(
            system_message=self.system_prompt,
            token_model=self.token_model,
            user_message=f"{question}\n\n{SOURCES_HEADER}\n{sources}",
            history=messages[:-1],
            token_limit=self.token_limit,
            counter=self._counter,
        )
        logfire.info(
            "Prompt built with {count} messages and {tokens} tokens",
            count=len(builder.messages),
            tokens=builder.tokens,
        )
        return builder

    @staticmethod
    def get_thoughts(query: str, builder: MessageBuilder) -> str:
        thoughts = f"Search query:\n{query}\n\nConversation:\n{builder.render()}"
        return thoughts.replace("\n", "<br>")

    @staticmethod
    def to_model_messages(messages: list[ChatMessage]) -> list[ModelMessage]:
        """Convert chat messages to model messages.

        Args:
            messages: The chat messages.

        Returns:
            The list of model messages.

        """
        results: list[ModelMessage] = []
        for message in messages:
            if message.role == Role.SYSTEM:
                results.append(
                    ModelRequest(parts=[SystemPromptPart(content=message.content)])
                )
            elif message.role == Role.USER:
                results.append(
                    ModelRequest(parts=[UserPromptPart(content=message.content)])
                )
            elif message.role == Role.ASSISTANT:
                results.append(ModelResponse(parts=[TextPart(content=message.content)]))
            else:
                msg = f"Invalid role: {message.role}"
                raise ValueError(msg)

        return results

    @staticmethod
    def _extract_text_chunk(event: Any) -> str | None:
        """Extract text chunk from a model stream event.

        Args:
            event: The stream event.

        Returns:
            The text chunk if the event carries text, otherwise None.

        """
        if isinstance(event, PartStartEvent) and isinstance(event.part, TextPart):
            return event.part.content

        if isinstance(event, PartDeltaEvent) and isinstance(
            event.delta, TextPartDelta
        ):
            return event.delta.content_delta

        return None

    async def _prepare(
        self, messages: list[ChatMessage]
    ) -> tuple[list[ModelMessage], ChatContext]:
        query = messages[-1].content
        data_points = await self.search(query=query)
        builder = self.build_prompt(messages=messages, data_points=data_points)
        context = ChatContext(
            data_points=data_points,
            thoughts=self.get_thoughts(query=query, builder=builder),
        )
        return self.to_model_messages(messages=builder.get_messages()), context

    async def run(self, messages: list[ChatMessage]) -> ChatCompletion:
        """Answer the last message of the conversation.

        Args:
            messages: The conversation, oldest first.

        Returns:
            The completion with its context.

        Raises:
            ChatGenerationError: If the model request fails.

        """
        model_messages, context = await self._prepare(messages=messages)

        with logfire.span("chat completion"):
            try:
                response = await self._model.request(
                    messages=model_messages,
                    model_settings=self._model_settings,
                    model_request_parameters=ModelRequestParameters(),
                )
            except GENERATION_ERRORS as error:
                raise ChatGenerationError(message=str(error)) from error

        content = "".join(
            part.content for part in response.parts if isinstance(part, TextPart)
        )
        return ChatCompletion(
            message=ChatMessage(role=Role.ASSISTANT, content=content),
            context=context,
        )

    async def run_with_streaming(
        self, messages: list[ChatMessage]
    ) -> AsyncIterator[ChatCompletionDelta]:
        """Answer the last message of the conversation as a stream.

        Retrieval and prompt assembly run before this returns, so their
        failures surface before any chunk is produced.

        Args:
            messages: The conversation, oldest first.

        Returns:
            The completion deltas. The first one carries the role and context.

        """
        model_messages, context = await self._prepare(messages=messages)
        return self._stream(model_messages=model_messages, context=context)

    async def _stream(
        self, model_messages: list[ModelMessage], context: ChatContext
    ) -> AsyncGenerator[ChatCompletionDelta, None]:
        yield ChatCompletionDelta(
            delta=ChatDelta(role=Role.ASSISTANT, content=""), context=context
        )

        # Spans must not stay open across yields.
        logfire.info("Chat completion stream started")
        chunks = 0
        try:
            async with self._model.request_stream(
                messages=model_messages,
                model_settings=self._model_settings,
                model_request_parameters=ModelRequestParameters(),
            ) as response:
                async for event in response:
                    chunk = self._extract_text_chunk(event=event)
                    if chunk:
                        chunks += 1
                        yield ChatCompletionDelta(delta=ChatDelta(content=chunk))
        except GENERATION_ERRORS as error:
            logfire.error(
                "Chat completion stream failed after {chunks} chunks",
                chunks=chunks,
            )
            raise ChatGenerationError(message=str(error)) from error

        logfire.info(
            "Chat completion stream finished with {chunks} chunks", chunks=chunks
        )
