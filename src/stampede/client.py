import logging

import aiohttp

from .models import RunConfig

logger = logging.getLogger(__name__)


class HttpClient:
    """aiohttp session shared by every worker loop. Response bodies are read and dropped."""

    def __init__(self, timeout_s: float | None = None, verify_tls: bool = False) -> None:
        self.timeout_s = timeout_s
        self.verify_tls = verify_tls
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def from_config(cls, config: RunConfig) -> "HttpClient":
        return cls(timeout_s=config.timeout_s, verify_tls=config.verify_tls)

    async def open(self) -> None:
        if self._session is not None:
            return
        connector = aiohttp.TCPConnector(limit=0, ssl=self.verify_tls)
        kwargs = {}
        if self.timeout_s is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout_s)
        self._session = aiohttp.ClientSession(connector=connector, **kwargs)
        logger.debug(
            f"Opened HTTP session (timeout={self.timeout_s}, verify_tls={self.verify_tls})"
        )

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("Closed HTTP session")

    async def __aenter__(self) -> "HttpClient":
        await self.open()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def get(self, url: str) -> int:
        if self._session is None:
            raise RuntimeError("HttpClient is not open")
        async with self._session.get(url) as resp:
            await resp.read()
            return resp.status
