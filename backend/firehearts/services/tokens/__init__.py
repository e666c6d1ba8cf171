from firehearts.services.tokens.dto import IdentityClaims, TokenPair, TokenTTLConfig
from firehearts.services.tokens.service import TokenService

__all__ = ["IdentityClaims", "TokenPair", "TokenService", "TokenTTLConfig"]
