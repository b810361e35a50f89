"""Module with exceptions raised by the pipelines."""


class HumanlyError(Exception):
    """Base class of all errors raised on purpose by the application."""

    status_code = 500

    def __init__(self, message: str) -> None:
        """Store the message describing the error."""
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message that is safe to be sent to the client."""
        return "Internal server error"


class ValidationError(HumanlyError):
    """Input is missing, blank, or too long. It can be corrected by the caller."""

    status_code = 400

    def __init__(self, message: str, limit: int | None = None) -> None:
        """
        Describe what is wrong with the input.

        Args:
            message (str): Message shown to the caller as is.
            limit (int | None, optional): The word limit that was exceeded.
                Defaults to None.
        """
        super().__init__(message)
        self.limit = limit

    @property
    def public_message(self) -> str:
        return self.message


class UpstreamError(HumanlyError):
    """The completion provider failed or returned an unparsable output."""


class GenerationError(UpstreamError):
    """The completion provider returned no usable text."""


class InternalError(HumanlyError):
    """Pipeline failure reported with a generic message, the cause is logged."""

    def __init__(self, message: str = "Internal server error") -> None:
        """Set the generic message sent to the client."""
        super().__init__(message)

    @property
    def public_message(self) -> str:
        return self.message
