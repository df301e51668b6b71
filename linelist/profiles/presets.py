from dataclasses import dataclass

from linelist.grammar.compiler import CANONICAL_PATTERNS
from linelist.grammar.models import ComponentSpec, FormatProfile

CUSTOM_PROFILE_NAME = "custom"

_COMPONENT_NAMES: dict[str, str] = {
    "line_size": "Line Size",
    "area": "Area",
    "fluid_code": "Fluid Code",
    "sequence_no": "Sequence No",
    "pipe_class": "Pipe Class",
    "insulation": "Insulation",
}

_COMPONENT_EXAMPLES: dict[str, str] = {
    "line_size": "36",
    "area": "41",
    "fluid_code": "SWR",
    "sequence_no": "60302",
    "pipe_class": "A2AU16",
    "insulation": "V",
}


@dataclass(frozen=True)
class Preset:
    """A named, read-only project format."""

    name: str
    description: str
    example: str
    order: tuple[str, ...]
    include_area: bool

    def build_profile(self) -> FormatProfile:
        """Build a full six-component profile with this preset's ordering enabled."""
        components = [
            ComponentSpec(
                id=component_id,
                name=_COMPONENT_NAMES[component_id],
                enabled=True,
                order=position,
                pattern=CANONICAL_PATTERNS[component_id],
                example=_COMPONENT_EXAMPLES[component_id],
            )
            for position, component_id in enumerate(self.order, start=1)
        ]
        next_order = len(components) + 1
        for component_id in CANONICAL_PATTERNS:
            if component_id in self.order:
                continue
            components.append(
                ComponentSpec(
                    id=component_id,
                    name=_COMPONENT_NAMES[component_id],
                    enabled=False,
                    order=next_order,
                    pattern=CANONICAL_PATTERNS[component_id],
                    example=_COMPONENT_EXAMPLES[component_id],
                )
            )
            next_order += 1
        return FormatProfile(components=tuple(components), separator="-")


PRESETS: dict[str, Preset] = {
    "onshore": Preset(
        name="onshore",
        description="No area code",
        example="2-D-5777-033842",
        order=("line_size", "fluid_code", "sequence_no", "pipe_class"),
        include_area=False,
    ),
    "general": Preset(
        name="general",
        description="With area code",
        example="1-41-SWS-64544-A2AU16",
        order=("line_size", "area", "fluid_code", "sequence_no", "pipe_class"),
        include_area=True,
    ),
    "offshore": Preset(
        name="offshore",
        description="Area-first format",
        example="604-HO-8-BC2GA0-1070",
        order=("area", "fluid_code", "line_size", "pipe_class", "sequence_no"),
        include_area=True,
    ),
}
