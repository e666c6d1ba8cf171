from firehearts.services.auth.dto import LoginIn, RefreshIn
from firehearts.services.auth.service import AuthService

__all__ = ["AuthService", "LoginIn", "RefreshIn"]
