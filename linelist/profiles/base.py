from abc import ABC, abstractmethod

from linelist.grammar.models import FormatProfile


class BaseProfileStore(ABC):
    """Contract for persisted profile storage, keyed by a caller-supplied scope."""

    @abstractmethod
    def load(self, scope: str) -> FormatProfile | None:
        """Return the saved profile for a scope, or None if nothing was saved.

        Raises:
            ProfileDecodeError: if the stored record is corrupted.
            ProfileStoreError: if the store cannot be read.
        """

    @abstractmethod
    def save(self, scope: str, profile: FormatProfile) -> None:
        """Replace the saved profile for a scope (last write wins).

        Raises:
            ProfileStoreError: if the store cannot be written.
        """
