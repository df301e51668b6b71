from linelist.profiles.base import BaseProfileStore
from linelist.profiles.factory import ProfileStoreFactory
from linelist.profiles.presets import PRESETS
from linelist.profiles.resolver import ResolvedProfile, resolve_profile
from linelist.profiles.session import ProfileSession

__all__ = [
    "PRESETS",
    "BaseProfileStore",
    "ProfileSession",
    "ProfileStoreFactory",
    "ResolvedProfile",
    "resolve_profile",
]
