from http import HTTPStatus

from exceptions.base import BaseError


class RetrievalError(BaseError):
    def __init__(
        self,
        message: str = "Retrieval failed",
        status_code: HTTPStatus = HTTPStatus.BAD_GATEWAY,
    ):
        super().__init__(message=message, status_code=status_code)


class ChatGenerationError(BaseError):
    def __init__(
        self,
        message: str = "Chat generation failed",
        status_code: HTTPStatus = HTTPStatus.BAD_GATEWAY,
    ):
        super().__init__(message=message, status_code=status_code)
