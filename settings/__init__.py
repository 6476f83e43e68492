from settings.azure import azure_settings
from settings.base import BASE_PATH
from settings.core import core_settings
from settings.openai import openai_settings
from settings.qdrant import qdrant_settings

__all__ = [
    "azure_settings",
    "core_settings",
    "openai_settings",
    "qdrant_settings",
    "BASE_PATH",
]
