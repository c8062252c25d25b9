"""Exceptions raised by the task service while handling a request."""


class ServerError(Exception):
    """Base exception for errors that end a request with an error response.

    Request handlers raise it, the application layer turns it into an
    `ErrorResponse` with `status_code`.
    """

    status_code: int = 500

    def __init__(self, message: str):
        """Initializes the ServerError.

        Args:
            message: Human readable message sent back in the `error` field.
        """
        self.message = message
        super().__init__(message)


class ValidationError(ServerError):
    """Malformed or missing input. The client can correct it and retry."""

    status_code = 400


class NotFoundError(ServerError):
    """The referenced task id does not exist in the store."""

    status_code = 404

    def __init__(self, message: str = 'Task not found.'):
        super().__init__(message)
