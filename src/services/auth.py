"""Authentication service for password hashing, JWT sessions and sign-up/sign-in."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from fastapi.concurrency import run_in_threadpool
from jose import JWTError, jwt
from passlib.context import CryptContext

from src.models.user import User
from src.services.errors import AuthenticationError
from src.services.task_graph import TaskGraphRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

# bcrypt ignores everything past this many bytes
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way, salted bcrypt hashing of user passwords."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        # Checked against when the email is unknown so both sign-in failures cost a bcrypt round
        self.dummy_hash = self._context.hash("dummy-password")

    def hash(self, password: str) -> str:
        """Hash a password."""
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Verify a password against its hash, failing closed on malformed hashes."""
        if not password_hash:
            return False
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False

    async def hash_async(self, password: str) -> str:
        """Hash in the threadpool so the event loop keeps serving other requests."""
        return await run_in_threadpool(self.hash, password)

    async def verify_async(self, password: str, password_hash: str | None) -> bool:
        """Verify in the threadpool so the event loop keeps serving other requests."""
        return await run_in_threadpool(self.verify, password, password_hash)


class TokenService:
    """Issues and verifies signed, time-limited session tokens.

    The signing key is fixed for the lifetime of the instance. There is no
    revocation list: a token stays valid until it expires.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expiration: timedelta | None = None):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.expiration = expiration or timedelta(days=14)

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        """Create a JWT whose subject is the user id."""
        issued_at = now or datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expiration,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> int | None:
        """Return the subject user id, or None for malformed, forged or expired tokens."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            return None

        subject = payload.get("sub")
        if subject is None:
            return None
        try:
            return int(subject)
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class AuthResult:
    """Signed-in user together with a freshly issued token."""

    user: User
    token: str


class AuthService:
    """Sign-up and sign-in, the only operations reachable anonymously."""

    def __init__(
        self,
        repository: TaskGraphRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.repository = repository
        self.hasher = hasher
        self.tokens = tokens

    async def sign_up(
        self, email: str, password: str, name: str, avatar: str | None = None
    ) -> AuthResult:
        """Create a user and sign them in.

        Raises ConflictError if the email is already registered.
        """
        password_hash = await self.hasher.hash_async(password)
        user = self.repository.create_user(
            email=email, password_hash=password_hash, name=name, avatar=avatar
        )
        logger.info(f"Signed up user {user.id}")
        return AuthResult(user=user, token=self.tokens.issue(user.id))

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Check credentials and issue a token.

        Unknown email and wrong password raise the same AuthenticationError.
        """
        user = self.repository.find_user_by_email(email)
        password_hash = user.password_hash if user is not None else self.hasher.dummy_hash
        verified = await self.hasher.verify_async(password, password_hash)
        if user is None or not verified:
            logger.info("Rejected sign-in attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)

        return AuthResult(user=user, token=self.tokens.issue(user.id))
