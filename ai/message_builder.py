from collections.abc import Callable, Sequence

from ai.tokenizer import count_message_tokens
from enums import Role
from schemas import ChatMessage

TokenCounter = Callable[[ChatMessage, str], int]


class MessageBuilder:
    """Token-tracked prompt for a single chat request.

    The system message always sits at index 0. New messages are inserted
    right after it, so building from the newest turn backwards leaves the
    sequence in chronological order.
    """

    def __init__(
        self,
        system_message: str,
        token_model: str,
        counter: TokenCounter = count_message_tokens,
    ):
        self.system_message = system_message
        self.token_model = token_model
        self._counter = counter

        system = ChatMessage(role=Role.SYSTEM, content=system_message)
        self.messages: list[ChatMessage] = [system]
        self.tokens = self.count(message=system)

    def count(self, message: ChatMessage) -> int:
        return self._counter(message, self.token_model)

    def append_message(self, role: Role, content: str, index: int = 1) -> None:
        """Insert a message after the system message and count its tokens.

        Args:
            role: The message role.
            content: The message content.
            index: The insert position, never before the system message.

        """
        message = ChatMessage(role=role, content=content)
        self.messages.insert(max(index, 1), message)
        self.tokens += self.count(message=message)

    def pop_message(self, index: int = 1) -> ChatMessage:
        """Remove a non-system message and subtract its tokens.

        Args:
            index: The message position, the latest insert by default.

        Returns:
            The removed message.

        Raises:
            IndexError: If the index does not point at a non-system message.

        """
        if not 1 <= index < len(self.messages):
            msg = f"No message to pop at index {index}"
            raise IndexError(msg)

        message = self.messages.pop(index)
        self.tokens -= self.count(message=message)
        return message

    def get_messages(self) -> list[ChatMessage]:
        return list(self.messages)

    def render(self) -> str:
        return "\n\n".join(
            f"{message.role}: {message.content}" for message in self.messages
        )


def build_messages(
    system_message: str,
    token_model: str,
    user_message: str,
    history: Sequence[ChatMessage],
    token_limit: int,
    counter: TokenCounter = count_message_tokens,
) -> MessageBuilder:
    """Build a prompt that keeps as much recent history as the budget allows.

    The current user message is always kept. History is added newest first
    and the walk stops at the first message that overflows the budget, even
    if an older one would still fit.

    Args:
        system_message: The system prompt.
        token_model: The model used to count tokens.
        user_message: The current user turn, sources included.
        history: The previous turns, oldest first.
        token_limit: The token budget.
        counter: The token estimator.

    Returns:
        The message builder holding the final prompt.

    """
    builder = MessageBuilder(
        system_message=system_message, token_model=token_model, counter=counter
    )
    builder.append_message(role=Role.USER, content=user_message)

    for message in reversed(history):
        builder.append_message(role=message.role, content=message.content)
        if builder.tokens > token_limit:
            builder.pop_message()
            break

    return builder
