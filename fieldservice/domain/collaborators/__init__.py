"""Collaborators domain - roles, team accounts, sessions and the permission matrix"""

from .router import router

__all__ = ["router"]
