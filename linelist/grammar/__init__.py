from linelist.grammar.compiler import (
    CANONICAL_PATTERNS,
    CompositeMatcher,
    compile_profile,
    normalize_patterns,
)
from linelist.grammar.models import ComponentSpec, FormatProfile

__all__ = [
    "CANONICAL_PATTERNS",
    "ComponentSpec",
    "CompositeMatcher",
    "FormatProfile",
    "compile_profile",
    "normalize_patterns",
]
