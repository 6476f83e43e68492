from functools import lru_cache

import logfire
import tiktoken

from constants import AZURE_MODEL_ALIASES, FALLBACK_ENCODING, MESSAGE_TOKEN_OVERHEAD
from schemas import ChatMessage


@lru_cache(maxsize=None)
def get_encoding(model: str) -> tiktoken.Encoding:
    """Get the tiktoken encoding for a model.

    Azure deployment names are mapped to their OpenAI model names first.
    Unknown models fall back to a general purpose encoding.

    Args:
        model: The model or deployment name.

    Returns:
        The encoding.

    """
    model_name = AZURE_MODEL_ALIASES.get(model, model)
    try:
        return tiktoken.encoding_for_model(model_name)
    except KeyError:
        logfire.warn(
            "No tokenizer known for {model}, using {encoding}",
            model=model,
            encoding=FALLBACK_ENCODING,
        )
        return tiktoken.get_encoding(FALLBACK_ENCODING)


def count_message_tokens(message: ChatMessage, model: str) -> int:
    """Estimate the number of tokens a chat message takes in the prompt.

    Args:
        message: The message.
        model: The model or deployment name.

    Returns:
        The token estimate, role and content included.

    """
    encoding = get_encoding(model=model)
    return (
        MESSAGE_TOKEN_OVERHEAD
        + len(encoding.encode(message.role.value))
        + len(encoding.encode(message.content))
    )
