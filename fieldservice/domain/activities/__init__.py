"""Activities domain - job types, the activity catalogue and activities scheduled on jobs"""

from .router import router

__all__ = ["router"]
