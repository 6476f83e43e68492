MEDIA_TYPE = "application/x-ndjson"
SOURCES_HEADER = "Sources:"
