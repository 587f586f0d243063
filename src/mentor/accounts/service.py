"""Signup, login and token verification.

Hides the credential scheme:
- bcrypt salted password hashes
- HS256 JSON Web Tokens carrying the account id, valid for one hour
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from ..errors import AccountNotFound, InvalidCredentials
from .base import AccountStore
from .models import Account

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
JWT_ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=1)


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class AccountService:
    """Registers users and issues login tokens."""

    def __init__(
        self,
        store: AccountStore,
        secret: str,
        token_ttl: timedelta = TOKEN_TTL,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ):
        self._store = store
        self._secret = secret
        self._token_ttl = token_ttl
        self._rounds = bcrypt_rounds

    @property
    def store(self) -> AccountStore:
        return self._store

    async def signup(self, name: str, email: str, password: str) -> Account:
        """Register a new account.

        Raises:
            AccountExists: If the email is already registered
        """
        account = Account(
            name=name,
            email=email,
            password_hash=hash_password(password, self._rounds),
        )
        created = await self._store.create(account)
        logger.info("Registered account %s", created.id)
        return created

    async def login(self, email: str, password: str) -> str:
        """Check credentials and issue a signed token.

        Raises:
            AccountNotFound: If the email is not registered
            InvalidCredentials: If the password does not match
        """
        account = await self._store.find_by_email(email)
        if account is None:
            raise AccountNotFound()
        if not check_password(password, account.password_hash):
            raise InvalidCredentials()
        return self.issue_token(account.id)

    def issue_token(self, account_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {"id": account_id, "iat": now, "exp": now + self._token_ttl}
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> str:
        """Return the account id carried by a valid token.

        Raises:
            InvalidCredentials: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.PyJWTError as e:
            raise InvalidCredentials("Invalid or expired token") from e
        return payload["id"]
