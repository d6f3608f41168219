"""
Asynchronous TMDB client.

Same commands and helpers as ``tmdbkit.Client``, with an ``httpx``
transport. Every helper returns a coroutine.

Example:
    async with AsyncClient() as client:
        movie = await client.get_movie_details(550)
        async for page in client.paginate(MoviePopular()):
            ...
"""

from functools import partial
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

import httpx

from tmdbkit.api_client import RequestError, default_timeout, parse_response
from tmdbkit.client import BaseClient, next_page
from tmdbkit.commands import Command
from tmdbkit.logging_config import get_logger
from tmdbkit.metrics import track_tmdb_request

logger = get_logger(__name__)


class AsyncExecutor:
    """Asynchronous HTTP transport; ``execute`` is a coroutine."""

    async def execute(self, url: str, params: Dict[str, str]) -> Any:
        raise NotImplementedError

    async def close(self):
        """Release transport resources."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class HttpxAsyncExecutor(AsyncExecutor):
    """
    Default async executor backed by an ``httpx.AsyncClient``.

    Status handling is shared with ``RequestsExecutor``.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        """
        Initialize the executor.

        Args:
            client: Client to send requests with; pass one built with a custom
                transport to add middleware or mock the network
            timeout: Request timeout in seconds (default: 10 or from env)
        """
        self.timeout = timeout or default_timeout()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"Accept": "application/json"},
        )

    async def execute(self, url: str, params: Dict[str, str]) -> Any:
        with track_tmdb_request(url):
            try:
                response = await self.client.get(url, params=params)
            # InvalidURL is not an HTTPError subclass
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise RequestError(
                    f"TMDB request failed: {type(e).__name__}: {e}",
                    original_error=e,
                ) from e

            return parse_response(response.status_code, response.text)

    async def close(self):
        """Close the underlying client when this executor created it."""
        if self._owns_client:
            await self.client.aclose()

    def __repr__(self):
        return f"HttpxAsyncExecutor(timeout={self.timeout})"


AsyncMiddleware = Callable[
    [str, Dict[str, str], Callable[[str, Dict[str, str]], Awaitable[Any]]],
    Awaitable[Any],
]


class AsyncMiddlewareExecutor(AsyncExecutor):
    """
    Async counterpart of ``MiddlewareExecutor``.

    Middlewares are coroutines ``middleware(url, params, call_next)`` that
    must ``await call_next(url, params)`` to continue the chain.
    """

    def __init__(self, inner: Optional[AsyncExecutor] = None, *middlewares: AsyncMiddleware):
        self.inner = inner or HttpxAsyncExecutor()
        self.middlewares = list(middlewares)

    async def _call(self, index: int, url: str, params: Dict[str, str]) -> Any:
        if index >= len(self.middlewares):
            return await self.inner.execute(url, params)
        return await self.middlewares[index](url, params, partial(self._call, index + 1))

    async def execute(self, url: str, params: Dict[str, str]) -> Any:
        return await self._call(0, url, params)

    async def close(self):
        await self.inner.close()

    def __repr__(self):
        return f"AsyncMiddlewareExecutor(inner={self.inner!r}, middlewares={len(self.middlewares)})"


class AsyncClient(BaseClient):
    """Asynchronous TMDB client."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 executor: Optional[AsyncExecutor] = None):
        """
        Initialize the client.

        Args:
            api_key: TMDB v3 API key (default: TMDB_API_KEY)
            base_url: API root (default: TMDB_BASE_URL or the public endpoint)
            executor: Async HTTP transport (default: HttpxAsyncExecutor)

        Raises:
            MissingApiKeyError: No API key available
        """
        super().__init__(api_key, base_url)
        self.executor = executor or HttpxAsyncExecutor()

    async def execute(self, command: Command) -> Any:
        """Run a command and return its parsed output."""
        url, params = self.build_request(command)
        payload = await self.executor.execute(url, params)
        return command.parse(payload)

    async def paginate(self, command: Command, max_pages: Optional[int] = None) -> AsyncIterator[Any]:
        """Async iterator over every page of a paginated command."""
        page = next_page(command, getattr(command, "page", None) or 1)
        fetched = 0
        while True:
            result = await self.execute(page)
            fetched += 1
            yield result
            if not result.has_more or (max_pages is not None and fetched >= max_pages):
                return
            page = next_page(page, result.page + 1)

    async def close(self):
        await self.executor.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
