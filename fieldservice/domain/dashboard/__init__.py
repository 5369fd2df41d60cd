"""Dashboard domain - summary counters and today's jobs"""

from .router import router

__all__ = ["router"]
