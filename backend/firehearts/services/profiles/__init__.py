from firehearts.services.profiles.dto import ProfileIn, ProfileOut, ProfileUpdateIn
from firehearts.services.profiles.service import (
    MAX_INCREMENT,
    ProfileService,
    clamp_increment,
    identity_of,
)

__all__ = [
    "MAX_INCREMENT",
    "ProfileIn",
    "ProfileOut",
    "ProfileService",
    "ProfileUpdateIn",
    "clamp_increment",
    "identity_of",
]
