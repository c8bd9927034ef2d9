"""Request/response envelopes exchanged with the transport layer.

The transport (outside this package) sends a :class:`Request` and hands
back a :class:`Response`. Parsers wrap their output in :class:`ApiResult`
or :class:`ApiFailure`; both keep the original request and response only
when the request was made with ``debug=True``.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Request:
    """An outbound carrier request payload.

    Attributes:
        url: Endpoint the transport should call.
        http_method: HTTP verb.
        body: Serialized payload (XML or JSON text); None for bodiless calls.
        headers: Headers the carrier requires, excluding credentials the
            transport adds itself.
        debug: Keep request and response on the parsed result.
    """

    url: str
    http_method: str = "POST"
    body: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    debug: bool = False


@dataclass(frozen=True)
class Response:
    """The transport's answer: status code, raw body, headers."""

    status: int
    body: str | bytes
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    @property
    def is_error(self) -> bool:
        return self.status >= 400


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Parsed carrier data plus, in debug mode, the raw exchange."""

    data: T
    original_request: Request | None = None
    original_response: Response | None = None

    @classmethod
    def build(
        cls,
        data: T,
        request: Request | None,
        response: Response | None,
    ) -> "ApiResult[T]":
        if request is not None and request.debug:
            return cls(data=data, original_request=request, original_response=response)
        return cls(data=data)


@dataclass(frozen=True)
class ApiFailure:
    """A domain failure returned instead of raised.

    ``failure`` is either a message or the exception that describes it;
    ``str()`` always yields the human-readable message.
    """

    failure: Any
    original_request: Request | None = None
    original_response: Response | None = None

    @classmethod
    def build(
        cls,
        failure: Any,
        request: Request | None,
        response: Response | None,
    ) -> "ApiFailure":
        if request is not None and request.debug:
            return cls(failure=failure, original_request=request, original_response=response)
        return cls(failure=failure)

    def __str__(self) -> str:
        return str(self.failure)
