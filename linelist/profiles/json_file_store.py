import json
from pathlib import Path
from typing import Any

from linelist.grammar.models import FormatProfile
from linelist.logging.logger import Log
from linelist.profiles.base import BaseProfileStore
from linelist.profiles.codec import profile_from_dict, profile_to_dict
from linelist.profiles.exceptions import ProfileDecodeError, ProfileStoreError


class JsonFileProfileStore(BaseProfileStore):
    """Keeps every scope's profile in a single JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self, scope: str) -> FormatProfile | None:
        document = self._read()
        if scope not in document:
            return None
        return profile_from_dict(document[scope])

    def save(self, scope: str, profile: FormatProfile) -> None:
        try:
            document = self._read()
        except ProfileDecodeError as exc:
            Log.warning(
                f"Replacing unreadable profile store {self._path}; "
                f"profiles saved under other scopes are lost: {exc}"
            )
            document = {}
        document[scope] = profile_to_dict(profile)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as exc:
            raise ProfileStoreError(f"Failed to write profile store: {exc}") from exc
        Log.debug(f"Wrote profile '{scope}' to {self._path}")

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProfileStoreError(f"Failed to read profile store: {exc}") from exc
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProfileDecodeError(f"Profile store is not valid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise ProfileDecodeError("Profile store must contain a JSON object")
        return document
