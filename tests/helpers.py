from schemas import ChatMessage

SYSTEM_PROMPT = "You are a coach."
ANSWER = "Stretch before you run [guide.pdf]."
STREAM_CHUNKS = ["Stretch ", "before ", "you run."]


def count_words(message: ChatMessage, model: str) -> int:
    return len(message.content.split())
