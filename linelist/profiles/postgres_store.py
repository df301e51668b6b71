import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from linelist.database.connection import get_connection
from linelist.grammar.models import FormatProfile
from linelist.logging.logger import Log
from linelist.profiles.base import BaseProfileStore
from linelist.profiles.codec import profile_from_dict, profile_to_dict
from linelist.profiles.exceptions import ProfileStoreError


class PostgresProfileStore(BaseProfileStore):
    """Database operations for the line_format_profiles table."""

    def load(self, scope: str) -> FormatProfile | None:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT config
                        FROM line_format_profiles
                        WHERE scope_key = %s
                        """,
                        (scope,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise ProfileStoreError(f"Failed to load profile '{scope}': {exc}") from exc

        if row is None:
            return None
        return profile_from_dict(row["config"])

    def save(self, scope: str, profile: FormatProfile) -> None:
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO line_format_profiles (scope_key, config, updated_at)
                    VALUES (%s, %s, NOW())
                    ON CONFLICT (scope_key)
                    DO UPDATE SET config = EXCLUDED.config, updated_at = NOW()
                    """,
                    (scope, Jsonb(profile_to_dict(profile))),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise ProfileStoreError(f"Failed to save profile '{scope}': {exc}") from exc
        Log.debug(f"Upserted profile '{scope}' into line_format_profiles")
