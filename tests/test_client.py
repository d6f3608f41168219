"""
Tests for the synchronous client: configuration, request building,
deserialization errors and pagination.
"""

import pytest

from tmdbkit.api_client import (
    MissingApiKeyError,
    NotFoundError,
    RequestsExecutor,
    ResponseError,
    ServerErrorBody,
)
from tmdbkit.client import Client
from tmdbkit.commands import MovieChanges, MovieDetails, MoviePopular, MovieSearch

from conftest import FakeExecutor, load_fixture


def page_payload(page, total_pages):
    payload = load_fixture("movie_search.json")
    payload["page"] = page
    payload["total_pages"] = total_pages
    return payload


class TestClientConfiguration:
    def test_missing_api_key(self):
        with pytest.raises(MissingApiKeyError) as exc_info:
            Client()

        assert str(exc_info.value) == "missing api key"

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("TMDB_API_KEY", "env-key")
        client = Client()

        assert client.api_key == "env-key"

    def test_explicit_api_key_wins(self, monkeypatch):
        monkeypatch.setenv("TMDB_API_KEY", "env-key")

        assert Client(api_key="explicit").api_key == "explicit"

    def test_default_base_url_and_executor(self):
        client = Client(api_key="k")

        assert client.base_url == "https://api.themoviedb.org/3"
        assert isinstance(client.executor, RequestsExecutor)

    def test_base_url_from_env_trailing_slash_stripped(self, monkeypatch):
        monkeypatch.setenv("TMDB_BASE_URL", "http://localhost:8080/3/")
        executor = FakeExecutor(load_fixture("movie_details.json"))
        client = Client(api_key="k", executor=executor)

        client.get_movie_details(550)

        assert client.base_url == "http://localhost:8080/3"
        assert executor.last_url == "http://localhost:8080/3/movie/550"

    def test_repr_hides_api_key(self):
        client = Client(api_key="super-secret-key", executor=FakeExecutor({}))

        assert "super-secret-key" not in repr(client)
        assert "api_key='REDACTED'" in repr(client)

    def test_context_manager_closes_executor(self):
        executor = FakeExecutor({})
        with Client(api_key="k", executor=executor):
            pass

        assert executor.closed


class TestClientExecute:
    def test_execute_command(self):
        executor = FakeExecutor(load_fixture("movie_details.json"))
        client = Client(api_key="k", executor=executor)

        movie = client.execute(MovieDetails(550))

        assert movie.title == "Fight Club"
        assert executor.last_params == {"api_key": "k"}

    def test_deserialization_error(self):
        """Test a payload of the wrong shape raises ResponseError."""
        client = Client(api_key="k", executor=FakeExecutor({"id": "not-a-number"}))

        with pytest.raises(ResponseError) as exc_info:
            client.get_movie_details(550)

        assert "MovieDetails" in str(exc_info.value)
        assert exc_info.value.original_error is not None

    def test_executor_errors_propagate(self):
        body = ServerErrorBody(status_code=34, status_message="The resource you requested could not be found.")
        error = NotFoundError("not found", body)
        client = Client(api_key="k", executor=FakeExecutor(error))

        with pytest.raises(NotFoundError):
            client.get_movie_details(0)


class TestPaginate:
    def test_walks_every_page(self):
        executor = FakeExecutor(page_payload(1, 3), page_payload(2, 3), page_payload(3, 3))
        client = Client(api_key="k", executor=executor)

        pages = list(client.paginate(MovieSearch("fight club")))

        assert [p.page for p in pages] == [1, 2, 3]
        assert [params["page"] for _, params in executor.calls] == ["1", "2", "3"]
        assert all(params["query"] == "fight club" for _, params in executor.calls)

    def test_starts_at_command_page(self):
        executor = FakeExecutor(page_payload(2, 3), page_payload(3, 3))
        client = Client(api_key="k", executor=executor)

        pages = list(client.paginate(MoviePopular(page=2)))

        assert [p.page for p in pages] == [2, 3]

    def test_max_pages(self):
        executor = FakeExecutor(page_payload(1, 10), page_payload(2, 10))
        client = Client(api_key="k", executor=executor)

        pages = list(client.paginate(MoviePopular(), max_pages=2))

        assert len(pages) == 2
        assert len(executor.calls) == 2

    def test_single_page(self):
        executor = FakeExecutor(page_payload(1, 1))
        client = Client(api_key="k", executor=executor)

        assert len(list(client.paginate(MoviePopular()))) == 1

    def test_empty_result(self):
        payload = {"page": 1, "results": [], "total_pages": 0, "total_results": 0}
        client = Client(api_key="k", executor=FakeExecutor(payload))

        pages = list(client.paginate(MoviePopular()))

        assert len(pages) == 1
        assert pages[0].results == []

    def test_command_not_paginated(self):
        client = Client(api_key="k", executor=FakeExecutor({}))

        with pytest.raises(TypeError):
            list(client.paginate(MovieDetails(550)))

    def test_page_field_without_paginated_output(self):
        executor = FakeExecutor(load_fixture("movie_changes.json"))
        client = Client(api_key="k", executor=executor)

        with pytest.raises(TypeError):
            list(client.paginate(MovieChanges(550)))

        assert executor.calls == []
