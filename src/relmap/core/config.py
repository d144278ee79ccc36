"""API settings resolved from explicit values, environment, or defaults."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT = 30.0


class ApiSettings(BaseModel):
    """Connection settings for the platform API."""

    base_url: str = Field(default=DEFAULT_API_URL, description="Root URL of the platform API")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-request timeout (s)")
    token: str | None = Field(default=None, description="Bearer token sent with every request")
    relationships_file: str | None = Field(
        default=None, description="JSON file overriding the built-in declarations"
    )

    @classmethod
    def from_env(
        cls,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        relationships_file: str | None = None,
    ) -> ApiSettings:
        """Resolve settings.

        Priority for each value:
        1. Explicit argument
        2. Environment variable (RELMAP_API_URL, RELMAP_API_TIMEOUT,
           RELMAP_API_TOKEN, RELMAP_RELATIONSHIPS_FILE)
        3. Default
        """
        if timeout is None:
            raw_timeout = os.getenv("RELMAP_API_TIMEOUT")
            if raw_timeout:
                try:
                    timeout = float(raw_timeout)
                except ValueError:
                    logger.warning(
                        f"Ignoring invalid RELMAP_API_TIMEOUT '{raw_timeout}'; "
                        f"using {DEFAULT_TIMEOUT}s"
                    )

        return cls(
            base_url=base_url or os.getenv("RELMAP_API_URL") or DEFAULT_API_URL,
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            token=token or os.getenv("RELMAP_API_TOKEN") or None,
            relationships_file=relationships_file or os.getenv("RELMAP_RELATIONSHIPS_FILE") or None,
        )
