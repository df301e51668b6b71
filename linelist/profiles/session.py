from linelist.grammar.compiler import compile_profile, normalize_patterns
from linelist.grammar.models import FormatProfile
from linelist.logging.logger import Log
from linelist.profiles.base import BaseProfileStore
from linelist.profiles.exceptions import NoProfileSelectedError, ProfileDecodeError
from linelist.profiles.resolver import ResolvedProfile, resolve_profile


class ProfileSession:
    """Holds the active format profile for the current extraction session.

    The active value is an immutable ResolvedProfile; every selection replaces
    it wholesale, so a snapshot taken by ``current()`` is never affected by
    later edits.
    """

    def __init__(self, store: BaseProfileStore, scope: str) -> None:
        self._store = store
        self._scope = scope
        self._active: ResolvedProfile | None = None

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def has_selection(self) -> bool:
        return self._active is not None

    def load(self) -> ResolvedProfile | None:
        """Load the persisted custom profile, forcing canonical patterns."""
        try:
            saved = self._store.load(self._scope)
        except ProfileDecodeError as exc:
            Log.warning(f"Ignoring corrupted profile for scope '{self._scope}': {exc}")
            return None
        if saved is None:
            Log.debug(f"No saved profile for scope '{self._scope}'")
            return None
        self._active = resolve_profile(normalize_patterns(saved))
        Log.info(
            f"Loaded profile for scope '{self._scope}' "
            f"({len(saved.enabled_components)} enabled components)"
        )
        return self._active

    def select_preset(self, name: str) -> ResolvedProfile:
        self._active = resolve_profile(name)
        Log.info(f"Selected preset '{self._active.name}'")
        return self._active

    def use_custom(self, profile: FormatProfile) -> ResolvedProfile:
        self._active = resolve_profile(profile)
        Log.info("Selected custom profile")
        return self._active

    def current(self) -> ResolvedProfile:
        """Return the active profile snapshot.

        Raises:
            NoProfileSelectedError: if no preset or custom profile was chosen.
        """
        if self._active is None:
            raise NoProfileSelectedError(
                "Select a line number format (preset or custom) before extraction"
            )
        return self._active

    def save(self) -> None:
        """Validate and persist the active profile under this session's scope.

        Raises:
            NoProfileSelectedError: if nothing is selected.
            GrammarError: if the active profile does not compile.
        """
        active = self.current()
        compile_profile(active.profile)
        self._store.save(self._scope, active.profile)
        Log.info(f"Saved profile for scope '{self._scope}'")
