"""Calendar domain - day / week / month views over jobs and job activities"""

from .router import router

__all__ = ["router"]
