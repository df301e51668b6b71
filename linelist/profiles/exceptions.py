class ProfileError(Exception):
    """Base exception for format profile errors."""


class NoProfileSelectedError(ProfileError):
    """Raised when extraction is attempted before a preset or custom profile is chosen."""


class UnknownPresetError(ProfileError):
    """Raised when a preset name is not one of the built-in presets."""


class ProfileDecodeError(ProfileError):
    """Raised when a serialized profile is corrupted or has the wrong shape."""


class ProfileStoreError(ProfileError):
    """Raised when the profile store cannot be read or written."""
