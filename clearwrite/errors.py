"""Failures the relay reports to its callers.

Each error carries the HTTP status the API answers with and the message shown
in the ``{"error": ...}`` body.
"""

from typing import Optional

from clearwrite.config import API_KEY_ENV, API_URL_ENV


class RelayError(Exception):
    status_code = 500
    message = "Failed to process text"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequest(RelayError):
    status_code = 400
    message = "Text and action are required"


class InvalidAction(RelayError):
    status_code = 400
    message = "Invalid action"

    def __init__(self, action: object = None) -> None:
        self.action = action
        super().__init__()


class ServerMisconfigured(RelayError):
    status_code = 500
    message = f"Server misconfiguration: missing {API_KEY_ENV} or {API_URL_ENV}"


class UpstreamError(RelayError):
    """The generative-language API answered with an error or could not be reached.

    ``detail`` describes the failure for the server log; callers only ever see
    the generic message.
    """

    status_code = 500

    def __init__(self, detail: str, *, upstream_status: Optional[int] = None) -> None:
        self.detail = detail
        self.upstream_status = upstream_status
        super().__init__()

    def __str__(self) -> str:
        return self.detail


__all__ = [
    "RelayError",
    "InvalidRequest",
    "InvalidAction",
    "ServerMisconfigured",
    "UpstreamError",
]
