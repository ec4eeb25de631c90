"""HTTP boundary for login attempts."""

from site_selector.api.router import router

__all__ = ["router"]
