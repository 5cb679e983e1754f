"""Exceptions shared by the Meridian server and client."""


class MeridianError(Exception):
    """Base class for Meridian errors."""


class ToolError(MeridianError):
    """Raised by a tool handler for a tool-level failure.

    The message is returned to the caller as the text of an ``isError`` result.
    """


class UnknownTimezoneError(MeridianError):
    """Raised when a timezone name cannot be resolved.

    Attributes:
        timezone: The name that failed to resolve
    """

    def __init__(self, timezone: str):
        super().__init__(f"Unknown timezone: {timezone}")
        self.timezone = timezone


class ClientError(MeridianError):
    """Base class for errors raised by the stdio client."""


class ClientNotConnectedError(ClientError):
    """Raised when the client is used before connect() or after close()."""

    def __init__(self, message: str = "Client is not connected to a server"):
        super().__init__(message)


class RequestTimeoutError(ClientError):
    """Raised when a request gets no response within the timeout window.

    Attributes:
        method: JSON-RPC method of the expired request
        request_id: Identifier of the expired request
        timeout: Timeout in seconds that elapsed
    """

    def __init__(self, method: str, request_id: int, timeout: float):
        super().__init__(f"Request timed out: {method} (id={request_id}) after {timeout:g}s")
        self.method = method
        self.request_id = request_id
        self.timeout = timeout


class RpcError(ClientError):
    """Raised when the server answers with a JSON-RPC error object.

    Attributes:
        code: JSON-RPC error code
        message: Error message sent by the server
        data: Optional error data
    """

    def __init__(self, code: int, message: str, data: object = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
