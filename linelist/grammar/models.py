from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class ComponentSpec:
    """One token of a composite line number, e.g. the fluid code."""

    id: str
    enabled: bool
    order: int
    pattern: str
    example: str = ""
    name: str = ""

    @property
    def rank(self) -> tuple[int, str]:
        return (self.order, self.id)


@dataclass(frozen=True)
class FormatProfile:
    """Ordered components plus the separator policy between them.

    Profiles are values: UI edits build a new profile with ``with_components``
    or ``dataclasses.replace`` instead of mutating an existing one.
    """

    components: tuple[ComponentSpec, ...] = field(default_factory=tuple)
    separator: str = "-"
    allow_variable_separators: bool = True

    def __post_init__(self) -> None:
        # Lists are accepted for convenience but stored as tuples to stay hashable.
        if not isinstance(self.components, tuple):
            object.__setattr__(self, "components", tuple(self.components))

    @property
    def enabled_components(self) -> tuple[ComponentSpec, ...]:
        """Enabled components ranked by (order, id)."""
        return tuple(sorted((c for c in self.components if c.enabled), key=lambda c: c.rank))

    def component(self, component_id: str) -> ComponentSpec | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def with_components(self, components: list[ComponentSpec]) -> "FormatProfile":
        return replace(self, components=tuple(components))
