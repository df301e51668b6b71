"""Compiles a FormatProfile into a composite line-number matcher."""

import re
from dataclasses import dataclass, field, replace

from linelist.grammar.exceptions import (
    DuplicateComponentError,
    GrammarError,
    InvalidPatternError,
    InvalidSeparatorError,
    NoEnabledComponentsError,
)
from linelist.grammar.models import ComponentSpec, FormatProfile

CANONICAL_PATTERNS: dict[str, str] = {
    "line_size": r"\d{1,2}",
    "area": r"\d{2,3}",
    "fluid_code": r"[A-Z]{1,3}",
    "sequence_no": r"\d{3,5}",
    "pipe_class": r"[A-Z0-9]{3,6}",
    "insulation": r"[A-Z]{1,2}",
}

TEMPLATE_LABELS: dict[str, str] = {
    "line_size": "SIZE",
    "area": "AREA",
    "fluid_code": "FLUID",
    "sequence_no": "SEQUENCE",
    "pipe_class": "PIPECLASS",
    "insulation": "INSULATION",
}

# Hyphen, non-breaking hyphen, figure dash, en dash, em dash, horizontal bar, minus sign
DASH_SEPARATORS: tuple[str, ...] = (
    "-",
    "\u2010",
    "\u2011",
    "\u2012",
    "\u2013",
    "\u2014",
    "\u2015",
    "\u2212",
)

_MAX_SEPARATOR_LENGTH = 3
_TOKEN_BOUNDARY_BEFORE = r"(?<![A-Za-z0-9])"
_TOKEN_BOUNDARY_AFTER = r"(?![A-Za-z0-9])"
_GLOBAL_FLAGS_RE = re.compile(r"(?<!\\)\(\?[aiLmsux]+\)")
_BACKREFERENCE_RE = re.compile(r"(?<!\\)(?:\\\\)*\\[1-9]")


@dataclass(frozen=True)
class CompositeMatcher:
    """Compiled grammar: one regex with a named group per enabled component."""

    pattern: str
    template: str
    capture_order: tuple[str, ...]
    _regex: re.Pattern[str] = field(repr=False, compare=False)
    _scanner: re.Pattern[str] = field(repr=False, compare=False)

    def segment(self, identifier: str) -> dict[str, str] | None:
        """Split a full identifier into component values, or None if it does not match."""
        match = self._regex.fullmatch(identifier.strip())
        if match is None:
            return None
        return {
            component_id: match.group(_group_name(index))
            for index, component_id in enumerate(self.capture_order)
        }

    def matches(self, identifier: str) -> bool:
        return self._regex.fullmatch(identifier.strip()) is not None

    def find_all(self, text: str) -> list[str]:
        """Return every identifier found in free text, in reading order."""
        return [match.group(0) for match in self._scanner.finditer(text)]


def compile_profile(profile: FormatProfile) -> CompositeMatcher:
    """Compile a profile into a CompositeMatcher.

    Raises:
        InvalidSeparatorError: if the separator is not 1-3 characters.
        NoEnabledComponentsError: if no component is enabled.
        DuplicateComponentError: if an id is enabled twice.
        InvalidPatternError: if an enabled component's pattern does not compile.
    """
    if not 1 <= len(profile.separator) <= _MAX_SEPARATOR_LENGTH:
        raise InvalidSeparatorError(
            f"Separator must be 1-{_MAX_SEPARATOR_LENGTH} characters, "
            f"got {profile.separator!r}"
        )

    components = profile.enabled_components
    if not components:
        raise NoEnabledComponentsError("Please enable at least one component")

    seen: set[str] = set()
    for component in components:
        if component.id in seen:
            raise DuplicateComponentError(component.id)
        seen.add(component.id)
        _check_pattern(component)

    separator = separator_pattern(profile)
    body = separator.join(
        f"(?P<{_group_name(index)}>{component.pattern})"
        for index, component in enumerate(components)
    )
    try:
        regex = re.compile(body)
        scanner = re.compile(f"{_TOKEN_BOUNDARY_BEFORE}{body}{_TOKEN_BOUNDARY_AFTER}")
    except re.error as exc:
        raise GrammarError(f"Composite pattern does not compile: {exc}") from exc

    return CompositeMatcher(
        pattern=body,
        template=build_template(profile),
        capture_order=tuple(c.id for c in components),
        _regex=regex,
        _scanner=scanner,
    )


def build_template(profile: FormatProfile) -> str:
    """Human-readable template, e.g. ``SIZE-FLUID-SEQUENCE-PIPECLASS``."""
    return profile.separator.join(
        TEMPLATE_LABELS.get(c.id, c.id.upper()) for c in profile.enabled_components
    )


def separator_pattern(profile: FormatProfile) -> str:
    literal = re.escape(profile.separator)
    if not profile.allow_variable_separators:
        return literal
    dashes = "".join(sorted(set(DASH_SEPARATORS)))
    return f"(?:{literal}|[{re.escape(dashes)}])"


def normalize_patterns(profile: FormatProfile) -> FormatProfile:
    """Force known component ids back to their canonical regex."""
    return profile.with_components(
        [
            replace(c, pattern=CANONICAL_PATTERNS[c.id]) if c.id in CANONICAL_PATTERNS else c
            for c in profile.components
        ]
    )


def _check_pattern(component: ComponentSpec) -> None:
    if not component.pattern:
        raise InvalidPatternError(component.id, "pattern is empty")
    try:
        compiled = re.compile(component.pattern)
    except re.error as exc:
        raise InvalidPatternError(component.id, str(exc)) from exc
    if compiled.groupindex:
        raise InvalidPatternError(component.id, "named groups are not allowed")
    if _GLOBAL_FLAGS_RE.search(component.pattern):
        raise InvalidPatternError(
            component.id, "inline flags must be scoped, e.g. (?i:...)"
        )
    if _BACKREFERENCE_RE.search(component.pattern):
        raise InvalidPatternError(component.id, "numbered backreferences are not allowed")


def _group_name(index: int) -> str:
    return f"c{index}"
