"""
Configuration for http_kit.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

from .cookies import CookieManager, default_cookie_manager
from .listeners import Listener

DEFAULT_USER_AGENT = "HttpKit HTTP Client"


def _is_debug_enabled_by_env() -> bool:
    """
    Check if debug panels are enabled via environment variables.

    Returns True if HTTP_KIT_DEBUG is set to 1, true or yes.
    """
    return os.environ.get("HTTP_KIT_DEBUG", "").strip().lower() in ("1", "true", "yes")


@dataclass
class ClientConfig:
    """Client configuration."""

    user_agent: str = DEFAULT_USER_AGENT
    cookie_manager: Optional[CookieManager] = None
    listeners: List[Listener] = field(default_factory=list)
    max_redirects: Optional[int] = None   # None: follow redirects without limit
    max_retries: Optional[int] = None     # None: listener retries without limit
    debug: bool = False


@dataclass
class ResolvedConfig:
    """Resolved client configuration with defaults applied."""

    user_agent: str
    cookie_manager: CookieManager
    listeners: List[Listener]
    max_redirects: Optional[int]
    max_retries: Optional[int]
    debug: bool


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    if not config.user_agent or not config.user_agent.strip():
        raise ValueError("user_agent is required")

    if config.max_redirects is not None and config.max_redirects < 0:
        raise ValueError(f"max_redirects must be >= 0, got {config.max_redirects}")

    if config.max_retries is not None and config.max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {config.max_retries}")

    for listener in config.listeners:
        if not isinstance(listener, Listener):
            raise ValueError(f"Invalid listener: {listener!r}")


def resolve_config(config: Optional[ClientConfig] = None) -> ResolvedConfig:
    """Resolve client configuration with defaults."""
    config = config or ClientConfig()
    validate_config(config)

    return ResolvedConfig(
        user_agent=config.user_agent,
        cookie_manager=config.cookie_manager or default_cookie_manager(),
        # shared with the caller so later registrations are seen by the client
        listeners=config.listeners,
        max_redirects=config.max_redirects,
        max_retries=config.max_retries,
        debug=config.debug or _is_debug_enabled_by_env(),
    )
