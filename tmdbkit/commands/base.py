"""
Command base class.

A command describes one TMDB endpoint: the path it targets, the query
parameters it sends and the type its JSON payload is parsed into. Commands
are plain dataclasses; executing them is the client's job.
"""

from functools import lru_cache
from typing import Any, Dict

from pydantic import TypeAdapter, ValidationError

from tmdbkit.api_client import ResponseError
from tmdbkit.utils import build_query


@lru_cache(maxsize=None)
def _adapter(output: Any) -> TypeAdapter:
    return TypeAdapter(output)


class Command:
    """
    Base class for endpoint descriptors.

    Subclasses set ``output`` to the type the payload is validated into and
    implement ``path``. ``params`` returns the optional query parameters;
    unset values (None, False) are dropped before sending. ``unwrap`` lets a
    command strip an envelope such as ``{"genres": [...]}``.
    """

    output: Any = None

    def path(self) -> str:
        raise NotImplementedError

    def params(self) -> Dict[str, Any]:
        return {}

    def query_params(self) -> Dict[str, str]:
        """Query parameters as they go on the wire (without the api key)."""
        return build_query(self.params())

    def unwrap(self, result: Any) -> Any:
        return result

    def parse(self, payload: Any) -> Any:
        """
        Deserialize a decoded JSON payload into the command's output type.

        Raises:
            ResponseError: Payload does not match the expected schema
        """
        try:
            result = _adapter(self.output).validate_python(payload)
        except ValidationError as e:
            raise ResponseError(
                f"Unable to deserialize {type(self).__name__} response: "
                f"{e.error_count()} validation error(s)",
                original_error=e,
            ) from e
        return self.unwrap(result)
