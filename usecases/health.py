import asyncio
from http import HTTPStatus

import httpx


class HealthUsecase:
    def __init__(self, qdrant_url: str):
        self.qdrant_url = qdrant_url

    @staticmethod
    async def check(url: str) -> bool:
        """Check that a dependency answers.

        Args:
            url: The URL to probe.

        Returns:
            True if the dependency is healthy, False otherwise.

        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=5.0)
                return response.status_code == HTTPStatus.OK
        except httpx.HTTPError:
            return False

    async def health(self) -> dict[str, tuple[str, bool]]:
        """Check all dependencies concurrently.

        Returns:
            Dictionary of dependency names and their probed URL and status.

        """
        targets = {"qdrant": f"{self.qdrant_url}/readyz"}

        results = await asyncio.gather(*[self.check(url) for url in targets.values()])

        return {
            name: (url, status)
            for (name, url), status in zip(targets.items(), results, strict=True)
        }
