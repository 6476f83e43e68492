from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class QdrantSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="qdrant_")

    host: str = Field(default="qdrant", title="Qdrant host")
    port: int = Field(default=6333, title="Qdrant port")
    collection: str = Field(default="documents", title="Collection name")
    embedding_model: str | None = Field(
        default=None, title="fastembed model name, library default when unset"
    )

    @property
    def url(self) -> str:
        """Url.

        Returns:
            Qdrant base URL.

        """
        return f"http://{self.host}:{self.port}"


qdrant_settings = QdrantSettings()
