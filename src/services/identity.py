"""Per-request identity context and its resolution from the Authorization header."""

import logging
from dataclasses import dataclass

from fastapi.security.utils import get_authorization_scheme_param

from src.models.user import User
from src.services.auth import TokenService
from src.services.task_graph import TaskGraphRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anonymous:
    """No authenticated user: missing, malformed, expired or orphaned token."""


@dataclass(frozen=True)
class Authenticated:
    """A request made by a known, existing user."""

    user: User


IdentityContext = Anonymous | Authenticated

ANONYMOUS = Anonymous()


class IdentityResolver:
    """Turns a raw Authorization header into an IdentityContext.

    Never raises: any problem with the credentials degrades to anonymous, and
    only a later authentication check makes that visible to the caller.
    """

    def __init__(self, tokens: TokenService, repository: TaskGraphRepository):
        self.tokens = tokens
        self.repository = repository

    def resolve(self, authorization: str | None) -> IdentityContext:
        if not authorization:
            return ANONYMOUS

        scheme, token = get_authorization_scheme_param(authorization)
        if scheme.lower() != "bearer" or not token:
            logger.debug("Ignoring non-bearer Authorization header")
            return ANONYMOUS

        user_id = self.tokens.verify(token)
        if user_id is None:
            logger.debug("Rejected invalid or expired token")
            return ANONYMOUS

        user = self.repository.find_user_by_id(user_id)
        if user is None:
            logger.debug(f"Token subject {user_id} no longer exists")
            return ANONYMOUS

        return Authenticated(user=user)
