"""Custom exceptions for the task client."""


class TaskClientError(Exception):
    """Base exception for task client errors."""


class TaskClientHTTPError(TaskClientError):
    """Client exception for HTTP errors received from the server."""

    def __init__(self, status_code: int, message: str):
        """Initializes the TaskClientHTTPError.

        Args:
            status_code: The HTTP status code of the response.
            message: The server's `error` message, or a description of the
              failure when there is none.
        """
        self.status_code = status_code
        self.message = message
        super().__init__(f'HTTP Error {status_code}: {message}')


class TaskClientJSONError(TaskClientError):
    """Client exception for JSON errors during response parsing or validation."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f'JSON Error: {message}')
