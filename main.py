from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import clients
from api.routers import chat, health
from exceptions import BaseError


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    yield
    await clients.close_clients()


app = FastAPI(lifespan=lifespan)


logfire.configure(send_to_logfire="if-token-present")
logfire.instrument_fastapi(app=app)
logfire.instrument_httpx()
logfire.instrument_pydantic_ai()

app.add_middleware(
    middleware_class=CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(exc_class_or_status_code=BaseError)
async def exception_handler(request: Request, exc: BaseError) -> JSONResponse:
    """Exception handler.

    Args:
        request: The request.
        exc: The exception.

    Returns:
        The JSON response.

    """
    logfire.error(
        "{method} {path} failed: {message}",
        method=request.method,
        path=request.url.path,
        message=exc.message,
    )
    return JSONResponse(content={"detail": exc.message}, status_code=exc.status_code)


app.include_router(router=health.router)
app.include_router(router=chat.router)


@app.get(path="/")
async def root() -> dict[str, str]:
    return {"message": "server up"}
