from typing import Optional
from httpx import Response


class AriError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class InvalidParameterError(AriError):
    """400: a request parameter was missing or malformed"""


class NotFoundError(AriError):
    """404: the bridge (or a channel it refers to) does not exist"""


class ConflictError(AriError):
    """409: the bridge is in a state that does not allow the operation"""


class UnprocessableEntityError(AriError):
    """422: the request was well formed but references something unusable"""


class ResourceDecodeError(AriError):
    """The server response could not be decoded into a resource"""


STATUS_ERRORS: dict[int, type[AriError]] = {
    400: InvalidParameterError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
}


def raise_for_status(response: Response, action: str, expected: int):
    if response.status_code == expected:
        return
    error_cls = STATUS_ERRORS.get(response.status_code, AriError)
    raise error_cls(
        f"Failed to {action}: {response.status_code} {response.text}",
        status_code=response.status_code,
        detail=response.text,
    )
