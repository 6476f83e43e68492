from http import HTTPStatus

from exceptions.base import BaseError


class CredentialError(BaseError):
    def __init__(
        self,
        message: str = "Failed to acquire access token",
        status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
    ):
        super().__init__(message=message, status_code=status_code)
