"""Runtime configuration, read once at startup."""
from __future__ import annotations
import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_PORT = 3001


@dataclass(frozen=True)
class Settings:
    """Relay settings.

    Attributes:
        gemini_api_key: Credential for generation calls. May be empty; calls then fail.
        gemini_model: Gemini model id.
        gemini_base_url: Override for the API root URL; empty uses the SDK default.
        gemini_timeout: HTTP timeout in seconds for one generation call.
        host: Listen address. Loopback by default.
        port: Listen port.
        log_level: Root logging level name.
    """
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL
    gemini_base_url: str = ""
    gemini_timeout: float = 120.0
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            gemini_api_key=env.get("GEMINI_API_KEY", ""),
            gemini_model=env.get("GEMINI_MODEL", DEFAULT_MODEL),
            gemini_base_url=env.get("GEMINI_BASE_URL", "").rstrip("/"),
            gemini_timeout=float(env.get("GEMINI_TIMEOUT", "120")),
            host=env.get("HOST", "127.0.0.1"),
            port=int(env.get("PORT", str(DEFAULT_PORT))),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
