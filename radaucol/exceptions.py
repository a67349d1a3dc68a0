import logging


# Library logger - no configuration, user controls output
logger = logging.getLogger(__name__)


class RadauColBaseError(Exception):
    """
    Base class for all radaucol-specific errors.

    All radaucol exceptions inherit from this class, allowing users to catch
    any transcription error with a single except clause.

    Args:
        message: The error message describing what went wrong
        context: Optional additional context about where the error occurred
    """

    def __init__(self, message: str, context: str | None = None) -> None:
        self.message = message
        self.context = context

        # Library logs at DEBUG level - user can promote if needed
        logger.debug("radaucol exception: %s", self._format_message())
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with optional context."""
        if self.context:
            return f"{self.message} (Context: {self.context})"
        return self.message


class ConfigurationError(RadauColBaseError):
    """
    Raised when a transcription is configured with invalid parameters.

    Configuration errors are detected once, when the transcription is built,
    and are never retried.

    Examples:
        - Polynomial degree below 1 or not an integer
        - Mesh not strictly increasing or not spanning [0, 1]
        - Final time not after initial time
        - Unknown transcription scheme identifier
    """

    pass


class DataIntegrityError(RadauColBaseError):
    """
    Raised when evaluation-time inputs are inconsistent with the transcription.

    Examples:
        - State or control blocks with the wrong number of rows or grid columns
        - Dynamics output with the wrong number of state derivatives
        - NaN or infinite values in computed coefficient tables
    """

    pass
