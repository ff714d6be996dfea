"""
Shared-secret access gate for the browser extension endpoints.
"""

import logging
import secrets
from typing import Annotated, Callable, Optional, Union

from fastapi import Depends, Header
from starlette.responses import Response

from gitlore.config import Settings
from gitlore.dependencies import get_settings
from gitlore.errors import AccessDenied


class AccessGate:
    """
    FastAPI dependency that checks the `x-gitlore-extension-key` header.

    Each route supplies the response it wants sent on rejection, so one
    check serves endpoints with different error contracts. A missing
    header, a mismatched value and an unconfigured secret are all rejected.
    """

    def __init__(self, reject: Callable[[], Response]):
        self.reject = reject

    def check(self, provided: Optional[str], expected: str) -> bool:
        if not provided or not expected:
            return False
        return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))

    def __call__(
        self,
        settings: Annotated[Settings, Depends(get_settings)],
        x_gitlore_extension_key: Annotated[Union[str, None], Header()] = None,
    ) -> None:
        if not self.check(x_gitlore_extension_key, settings.EXTENSION_SECRET):
            logging.warning("Rejected request with missing or invalid extension key")
            raise AccessDenied(self.reject())
