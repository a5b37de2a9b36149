"""Supabase connectivity probe."""

from dataclasses import dataclass

from supabase import Client

from nutri_tracker.services.database import DatabaseProbe


@dataclass
class SupabaseDatabaseProbe(DatabaseProbe):
    """Runs a one-row select against the users table."""

    client: Client

    def ping(self) -> None:
        """Raise when the query cannot be executed."""
        self.client.table("users").select("id").limit(1).execute()
