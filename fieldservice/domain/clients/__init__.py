"""Clients domain - customer records and contact details"""

from .router import router

__all__ = ["router"]
