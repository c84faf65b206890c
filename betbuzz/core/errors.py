"""
Error taxonomy for request handling.

Each error carries an HTTP status and a terse public message. The public
message is the only thing the client sees; the exception's own message and
its chained cause are for the server log.

    ClientInputError  -> 400  required query parameter missing
    NotFoundError     -> 404  providers answered but no matching record exists
    UpstreamError     -> 500  provider returned non-2xx, or transport failed
    UnexpectedError   -> 500  anything else raised while building a response
"""
from contextlib import contextmanager
from typing import Iterator, Optional


class ApiError(Exception):
    """Base class for errors translated into a `{"error": ...}` response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, public_message: Optional[str] = None):
        super().__init__(message or public_message or self.default_message)
        self.public_message = public_message or message or self.default_message


class ClientInputError(ApiError):
    status_code = 400
    default_message = "invalid request"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "not found"


class UpstreamError(ApiError):
    """
    A third-party provider call failed.

    The message names the provider and status for the log; the public
    message is replaced by the route's own wording before it reaches the
    client.
    """

    status_code = 500
    default_message = "upstream request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        provider: Optional[str] = None,
        status: Optional[int] = None,
        public_message: Optional[str] = None,
    ):
        super().__init__(message, public_message=public_message or self.default_message)
        self.provider = provider
        self.status = status


class UnexpectedError(ApiError):
    status_code = 500


@contextmanager
def translate_failures(public_message: str) -> Iterator[None]:
    """
    Re-label every server-side failure in the block with `public_message`.

    Client-side outcomes (400, 404) pass through untouched. Upstream and
    unexpected failures are re-raised as 500-class errors chained to the
    original exception, so the handler can log the full cause.
    """
    try:
        yield
    except (ClientInputError, NotFoundError):
        raise
    except UpstreamError as exc:
        raise UpstreamError(
            str(exc),
            provider=exc.provider,
            status=exc.status,
            public_message=public_message,
        ) from exc
    except Exception as exc:
        raise UnexpectedError(repr(exc), public_message=public_message) from exc
