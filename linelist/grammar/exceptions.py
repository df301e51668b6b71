class GrammarError(Exception):
    """Base exception for line-number grammar errors."""


class InvalidPatternError(GrammarError):
    """Raised when an enabled component carries an invalid regular expression."""

    def __init__(self, component_id: str, detail: str = "") -> None:
        self.component_id = component_id
        message = f"Invalid pattern for component '{component_id}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NoEnabledComponentsError(GrammarError):
    """Raised when a profile has no enabled components."""


class DuplicateComponentError(GrammarError):
    """Raised when the same component id is enabled more than once."""

    def __init__(self, component_id: str) -> None:
        self.component_id = component_id
        super().__init__(f"Component '{component_id}' is enabled more than once")


class InvalidSeparatorError(GrammarError):
    """Raised when the separator is empty or longer than three characters."""
