import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_ROOT_PEM = "rootPEM.txt"
DEFAULT_LOG_LEVEL = "WARNING"


class ClientConfig(BaseModel):
    """Settings for one process run, built once at startup."""

    url: Optional[str] = None
    profile: int = Field(default=0, ge=0)
    root_pem: str = DEFAULT_ROOT_PEM
    plot: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v!r}")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "ClientConfig":
        """Environment defaults (ROOT_PEM, LOG_LEVEL) under explicit overrides.

        Overrides that are None are ignored so unset CLI flags fall through.
        """
        env = os.environ if environ is None else environ
        values = {
            "root_pem": env.get("ROOT_PEM", DEFAULT_ROOT_PEM),
            "log_level": env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
