"""
Tests for the async client and executors.

HTTP is mocked with ``httpx.MockTransport``; coroutines are driven with
``asyncio.run`` so no async test plugin is needed.
"""

import asyncio

import httpx
import pytest

from tmdbkit.api_client import AuthError, RequestError, ServerValidationError
from tmdbkit.async_client import AsyncClient, AsyncMiddlewareExecutor, HttpxAsyncExecutor
from tmdbkit.commands import MovieChanges, MoviePopular

from conftest import load_fixture


def build_client(handler):
    """Async client whose executor answers requests with ``handler``."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncClient(api_key="test-key", executor=HttpxAsyncExecutor(client=http))


class TestHttpxAsyncExecutor:
    def test_movie_details(self):
        requests_seen = []

        def handler(request):
            requests_seen.append(request)
            return httpx.Response(200, json=load_fixture("movie_details.json"))

        async def run():
            client = build_client(handler)
            return await client.get_movie_details(550, language="en-US")

        movie = asyncio.run(run())

        assert movie.title == "Fight Club"
        request = requests_seen[0]
        assert request.url.path == "/3/movie/550"
        assert dict(request.url.params) == {"language": "en-US", "api_key": "test-key"}

    def test_401(self):
        def handler(request):
            return httpx.Response(401, json=load_fixture("error_401.json"))

        async def run():
            await build_client(handler).get_movie_details(550)

        with pytest.raises(AuthError) as exc_info:
            asyncio.run(run())

        assert exc_info.value.status_code == 401

    def test_422(self):
        def handler(request):
            return httpx.Response(422, json=load_fixture("error_422.json"))

        async def run():
            await build_client(handler).search_movies("x", page=1000)

        with pytest.raises(ServerValidationError) as exc_info:
            asyncio.run(run())

        assert exc_info.value.errors == ["page must be less than or equal to 500"]

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async def run():
            await build_client(handler).get_movie_details(550)

        with pytest.raises(RequestError) as exc_info:
            asyncio.run(run())

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    def test_invalid_url(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))

        async def run():
            async with HttpxAsyncExecutor(client=http) as executor:
                try:
                    await executor.execute("http://localhost:notaport/3/movie/550", {})
                finally:
                    await http.aclose()

        with pytest.raises(RequestError) as exc_info:
            asyncio.run(run())

        assert isinstance(exc_info.value.original_error, httpx.InvalidURL)

    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("TMDB_TIMEOUT", "4")

        async def run():
            executor = HttpxAsyncExecutor()
            await executor.close()
            return executor.timeout

        assert asyncio.run(run()) == 4.0

    def test_shared_client_not_closed(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))

        async def run():
            await HttpxAsyncExecutor(client=http).close()
            closed = http.is_closed
            await http.aclose()
            return closed

        assert asyncio.run(run()) is False


class TestAsyncMiddlewareExecutor:
    def test_middlewares_run_in_order(self):
        seen = []

        async def add_language(url, params, call_next):
            seen.append("language")
            return await call_next(url, {**params, "language": "fr-FR"})

        async def record(url, params, call_next):
            seen.append("record")
            return await call_next(url, params)

        def handler(request):
            return httpx.Response(200, json={"language": request.url.params["language"]})

        async def run():
            http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            executor = AsyncMiddlewareExecutor(HttpxAsyncExecutor(client=http), add_language, record)
            result = await executor.execute("https://api.themoviedb.org/3/movie/550", {})
            await http.aclose()
            return result

        assert asyncio.run(run()) == {"language": "fr-FR"}
        assert seen == ["language", "record"]


class TestAsyncClient:
    def test_missing_api_key(self):
        from tmdbkit.api_client import MissingApiKeyError

        with pytest.raises(MissingApiKeyError):
            AsyncClient(executor=HttpxAsyncExecutor(client=httpx.AsyncClient()))

    def test_repr_hides_api_key(self):
        client = AsyncClient(api_key="super-secret", executor=HttpxAsyncExecutor(client=httpx.AsyncClient()))

        assert "super-secret" not in repr(client)

    def test_paginate(self):
        def handler(request):
            page = int(request.url.params["page"])
            payload = load_fixture("movie_search.json")
            payload["page"] = page
            payload["total_pages"] = 3
            return httpx.Response(200, json=payload)

        async def run():
            pages = []
            async with build_client(handler) as client:
                async for result in client.paginate(MoviePopular()):
                    pages.append(result.page)
            return pages

        assert asyncio.run(run()) == [1, 2, 3]

    def test_paginate_max_pages(self):
        def handler(request):
            payload = load_fixture("movie_search.json")
            payload["page"] = int(request.url.params["page"])
            payload["total_pages"] = 50
            return httpx.Response(200, json=payload)

        async def run():
            client = build_client(handler)
            return [result.page async for result in client.paginate(MoviePopular(), max_pages=2)]

        assert asyncio.run(run()) == [1, 2]

    def test_paginate_rejects_unpaginated_output(self):
        requests_seen = []

        def handler(request):
            requests_seen.append(request)
            return httpx.Response(200, json=load_fixture("movie_changes.json"))

        async def run():
            async for _ in build_client(handler).paginate(MovieChanges(550)):
                pass

        with pytest.raises(TypeError):
            asyncio.run(run())

        assert requests_seen == []
