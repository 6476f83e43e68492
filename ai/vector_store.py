import asyncio
import re
from collections.abc import Sequence
from dataclasses import dataclass

from fastembed import TextEmbedding
from qdrant_client import AsyncQdrantClient

SOURCE_KEY = "source"
DOCUMENT_KEY = "document"
NEWLINES = re.compile(r"[\n\r]+")


@dataclass(frozen=True)
class RetrievedDocument:
    source: str
    content: str

    def to_data_point(self) -> str:
        content = NEWLINES.sub(" ", self.content)
        return f"{self.source}: {content}"


class QdrantVectorStore:
    def __init__(
        self, client: AsyncQdrantClient, embedder: TextEmbedding, collection: str
    ):
        self._client = client
        self._embedder = embedder
        self.collection = collection

    def _embed_sync(self, texts: Sequence[str]) -> list[list[float]]:
        return [vector.tolist() for vector in self._embedder.embed(list(texts))]

    async def _embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        return await asyncio.to_thread(self._embed_sync, texts)

    async def similarity_search(
        self, query: str, limit: int
    ) -> list[RetrievedDocument]:
        """Find the passages closest to the query.

        Args:
            query: The search query.
            limit: The maximum number of passages.

        Returns:
            The passages, most similar first.

        """
        if limit <= 0:
            return []

        if not await self._client.collection_exists(collection_name=self.collection):
            return []

        response = await self._client.query_points(
            collection_name=self.collection,
            query=(await self._embed_texts(texts=[query]))[0],
            with_payload=True,
            limit=limit,
        )

        documents = []
        for point in response.points:
            payload = point.payload or {}
            documents.append(
                RetrievedDocument(
                    source=str(payload.get(SOURCE_KEY, point.id)),
                    content=str(payload.get(DOCUMENT_KEY, "")),
                )
            )

        return documents

    async def close(self) -> None:
        await self._client.close()
