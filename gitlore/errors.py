from starlette.responses import Response


class ModelClientError(Exception):
    """Raised when the language model call fails or cannot be made."""


class FileFetchError(Exception):
    """Raised when a file cannot be retrieved from GitHub."""


class AccessDenied(Exception):
    """Raised by the access gate; carries the response to send back."""

    def __init__(self, response: Response):
        super().__init__("Access denied")
        self.response = response
