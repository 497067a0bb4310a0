from __future__ import annotations


# PUBLIC_INTERFACE
class UpstreamError(Exception):
    """
    Raised by storage backends when the database call fails.

    The message is surfaced to API callers verbatim, so backends should pass
    through whatever text the database reported.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
