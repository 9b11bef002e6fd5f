"""Account operations against the repository service."""

from __future__ import annotations

from dataclasses import dataclass

from k7tui.models import RepoServiceClient, UserResponse


@dataclass
class AuthService:
    """Registers and looks up users through a repository client."""

    client: RepoServiceClient

    def register(self, username: str) -> None:
        """Create an account with the given user name."""
        self.client.create_user(username)

    def get_user(self, username: str) -> UserResponse:
        """Return the account with the given user name."""
        return self.client.get_user(username)