DEFAULT_TOKEN_LIMIT = 4000
# "role" and "content" keys
MESSAGE_TOKEN_OVERHEAD = 2
FALLBACK_ENCODING = "o200k_base"
AZURE_MODEL_ALIASES = {
    "gpt-35-turbo": "gpt-3.5-turbo",
    "gpt-35-turbo-16k": "gpt-3.5-turbo-16k",
}
