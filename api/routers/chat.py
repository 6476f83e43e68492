from collections.abc import AsyncGenerator, AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Body, Depends
from fastapi.responses import StreamingResponse

from api.dependencies import chat
from constants import MEDIA_TYPE
from schemas import ChatCompletion, ChatCompletionDelta, ChatRequest

router = APIRouter(prefix="/chat", tags=["Chat"])


async def ndjson_stream(
    chunks: AsyncIterator[ChatCompletionDelta],
) -> AsyncGenerator[bytes, None]:
    async for chunk in chunks:
        yield chunk.model_dump_bytes()


@router.post(path="")
async def chat_completion(
    data: Annotated[ChatRequest, Body(default=...)],
    usecase: Annotated[chat.ChatUsecase, Depends(dependency=chat.get_chat_usecase)],
) -> ChatCompletion:
    return await usecase.run(messages=data.messages)


@router.post(path="/stream")
async def chat_stream(
    data: Annotated[ChatRequest, Body(default=...)],
    usecase: Annotated[chat.ChatUsecase, Depends(dependency=chat.get_chat_usecase)],
) -> StreamingResponse:
    return StreamingResponse(
        content=ndjson_stream(
            chunks=await usecase.run_with_streaming(messages=data.messages)
        ),
        media_type=MEDIA_TYPE,
    )
