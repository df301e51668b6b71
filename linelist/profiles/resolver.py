from dataclasses import dataclass

from linelist.grammar.models import FormatProfile
from linelist.profiles.exceptions import NoProfileSelectedError, UnknownPresetError
from linelist.profiles.presets import CUSTOM_PROFILE_NAME, PRESETS

ProfileSelection = str | FormatProfile | None


@dataclass(frozen=True)
class ResolvedProfile:
    """The profile an extraction runs with, plus its derived area flag."""

    name: str
    profile: FormatProfile
    include_area: bool

    @property
    def is_preset(self) -> bool:
        return self.name in PRESETS


def resolve_profile(selection: ProfileSelection) -> ResolvedProfile:
    """Resolve a preset name or a custom profile.

    Raises:
        NoProfileSelectedError: if nothing was selected.
        UnknownPresetError: if the preset name is not built in.
    """
    if selection is None:
        raise NoProfileSelectedError(
            "Select a line number format (preset or custom) before extraction"
        )
    if isinstance(selection, FormatProfile):
        area = selection.component("area")
        return ResolvedProfile(
            name=CUSTOM_PROFILE_NAME,
            profile=selection,
            include_area=area is not None and area.enabled,
        )
    preset = PRESETS.get(selection.lower())
    if preset is None:
        raise UnknownPresetError(
            f"Unknown preset '{selection}'. Choose from: {sorted(PRESETS)}"
        )
    return ResolvedProfile(
        name=preset.name,
        profile=preset.build_profile(),
        include_area=preset.include_area,
    )
