"""Jobs domain - scheduled work orders, completion and the calendar feed"""

from .router import router

__all__ = ["router"]
