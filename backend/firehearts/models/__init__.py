from firehearts.models.profile import DEFAULT_FIREHEARTS, Profile
from firehearts.models.refresh_credential import RefreshCredential

__all__ = [
    "DEFAULT_FIREHEARTS",
    "Profile",
    "RefreshCredential",
]
