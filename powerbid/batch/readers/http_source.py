"""
HTTP(S) source using aiohttp.
"""

import aiohttp

from powerbid.core.exceptions import RetrievalError
from powerbid.observability.logger import get_logger

logger = get_logger(__name__)


class HttpSource:
    """
    Fetches raw bytes with a GET request.

    A non-2xx status or any transport failure surfaces as RetrievalError so
    callers can tell it apart from validation problems. No retries.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        request_timeout: float = 25,
        connect_timeout: float = 10,
    ):
        """
        Args:
            session: Shared client session; a short-lived one is opened per fetch if None
            request_timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
        """
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=request_timeout, connect=connect_timeout)

    async def fetch(self, source_id: str) -> bytes:
        """
        GET source_id and return the body.

        Raises:
            RetrievalError: Non-success status, timeout or connection failure
        """
        if self._session is not None:
            return await self._get(self._session, source_id)

        async with aiohttp.ClientSession() as session:
            return await self._get(session, source_id)

    async def _get(self, session: aiohttp.ClientSession, url: str) -> bytes:
        try:
            async with session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            ) as response:
                if response.status < 200 or response.status >= 300:
                    raise RetrievalError(url, response.reason or "request failed", status=response.status)
                return await response.read()
        except aiohttp.ClientError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise RetrievalError(url, str(e) or type(e).__name__)
        except TimeoutError:
            raise RetrievalError(url, "request timed out")
