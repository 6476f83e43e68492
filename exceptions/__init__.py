from exceptions.base import BaseError
from exceptions.chat import ChatGenerationError, RetrievalError
from exceptions.credential import CredentialError

__all__ = [
    "BaseError",
    "ChatGenerationError",
    "CredentialError",
    "RetrievalError",
]
