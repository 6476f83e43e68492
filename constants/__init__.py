from constants.auth import COGNITIVE_SERVICES_SCOPE, DUMMY_TOKEN
from constants.chat import MEDIA_TYPE, SOURCES_HEADER
from constants.encoding import UTF8
from constants.retrieve import DEFAULT_N_RESULTS
from constants.tokens import (
    AZURE_MODEL_ALIASES,
    DEFAULT_TOKEN_LIMIT,
    FALLBACK_ENCODING,
    MESSAGE_TOKEN_OVERHEAD,
)

__all__ = [
    "MEDIA_TYPE",
    "SOURCES_HEADER",
    "UTF8",
    "DEFAULT_N_RESULTS",
    "DEFAULT_TOKEN_LIMIT",
    "MESSAGE_TOKEN_OVERHEAD",
    "FALLBACK_ENCODING",
    "AZURE_MODEL_ALIASES",
    "COGNITIVE_SERVICES_SCOPE",
    "DUMMY_TOKEN",
]
