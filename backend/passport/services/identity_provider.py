import logging
from functools import lru_cache
from typing import Optional

import httpx

from passport.config import get_settings
from passport.exceptions import BadRequestError, UpstreamError

logger = logging.getLogger(__name__)


class IdentityProviderClient:
    """Client for account operations delegated to the external identity provider."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def change_password(self, access_token: str, new_password: str) -> None:
        if not self.base_url:
            raise UpstreamError("Identity provider is not configured")

        headers = {"Authorization": f"Bearer {access_token}"}
        if self.api_key:
            headers["apikey"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.put(
                    f"{self.base_url}/auth/v1/user",
                    headers=headers,
                    json={"password": new_password},
                )
        except httpx.HTTPError as e:
            logger.error("Identity provider unreachable: %s", e)
            raise UpstreamError("Identity provider unreachable") from e

        if 400 <= response.status_code < 500:
            raise BadRequestError(self._error_message(response))
        if response.status_code >= 500:
            logger.error("Identity provider returned %s on password change", response.status_code)
            raise UpstreamError("Identity provider error")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return "Password change rejected"
        if isinstance(data, dict):
            for key in ("msg", "error_description", "message"):
                if data.get(key):
                    return str(data[key])
        return "Password change rejected"


@lru_cache()
def get_identity_provider() -> IdentityProviderClient:
    settings = get_settings()
    return IdentityProviderClient(
        base_url=settings.identity_provider_url,
        api_key=settings.identity_provider_api_key,
        timeout=settings.identity_provider_timeout,
    )
