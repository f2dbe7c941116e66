"""Authentication dependency for API routes.

The route gate has already resolved the session; routes only read it.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ...exceptions import AuthenticationError
from ...services.auth_service import SessionUser


@dataclass
class CurrentUser:
    """Represents the currently authenticated user.

    Attributes:
        user_id: Unique identifier for the user.
        email: User's email address.
    """

    user_id: str
    email: str

    @property
    def id(self) -> str:
        """Alias for user_id for compatibility."""
        return self.user_id

    @property
    def display_name(self) -> str:
        return self.email.split("@", 1)[0]

    @property
    def avatar_initial(self) -> str:
        return self.email[:1].upper()


def get_current_user(request: Request) -> CurrentUser:
    """FastAPI dependency for the signed-in user.

    Raises:
        AuthenticationError (401): If the request carries no valid session.
    """
    user: Optional[SessionUser] = getattr(request.state, "user", None)
    if user is None:
        raise AuthenticationError("Not authenticated")
    return CurrentUser(user_id=user.id, email=user.email)

