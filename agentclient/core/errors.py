"""
Client errors.

TransportError covers any failure of the request/response exchange itself
(connectivity, non-2xx status, undecodable body). JoinError is raised when the
agent answers a join request successfully but reports a failure in the payload.
"""


class AgentClientError(Exception):
    """Base class for errors raised by the agent client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(AgentClientError):
    """Raised when a request to the agent fails or its response cannot be decoded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class JoinError(AgentClientError):
    """Raised when the agent reports an error in its join response."""

    def __init__(self, message: str, remote_error: str = "", num_nodes: int = 0) -> None:
        self.remote_error = remote_error
        self.num_nodes = num_nodes
        super().__init__(message)
