from dataclasses import dataclass

import logfire
from azure.core.credentials_async import AsyncTokenCredential
from azure.core.exceptions import ClientAuthenticationError

from exceptions import CredentialError


@dataclass(frozen=True)
class TokenSuccess:
    token: str


@dataclass(frozen=True)
class TokenFailure:
    reason: str


TokenResult = TokenSuccess | TokenFailure


class BearerTokenProvider:
    """Bearer token source for the Azure OpenAI client.

    Awaiting an instance returns a token string. When no credential is
    available and ``allow_dummy_token`` is set, ``dummy_token`` is returned
    instead, which only works behind an OpenAI proxy.
    """

    def __init__(
        self,
        credential: AsyncTokenCredential,
        scope: str,
        allow_dummy_token: bool = False,
        dummy_token: str = "__dummy",
    ):
        self._credential = credential
        self.scope = scope
        self.allow_dummy_token = allow_dummy_token
        self.dummy_token = dummy_token

    async def acquire(self) -> TokenResult:
        try:
            access_token = await self._credential.get_token(self.scope)
        except ClientAuthenticationError as error:
            return TokenFailure(reason=str(error))

        return TokenSuccess(token=access_token.token)

    async def close(self) -> None:
        await self._credential.close()

    async def __call__(self) -> str:
        result = await self.acquire()
        if isinstance(result, TokenSuccess):
            return result.token

        if self.allow_dummy_token:
            logfire.warn(
                "Failed to get Azure OpenAI token, using dummy key: {reason}",
                reason=result.reason,
            )
            return self.dummy_token

        raise CredentialError(
            message=f"Failed to get Azure OpenAI token: {result.reason}"
        )
