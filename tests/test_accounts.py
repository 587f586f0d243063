"""Unit tests for accounts: stores, credential checks and the HTTP client."""
import json
from datetime import timedelta

import httpx
import jwt
import pytest

from mentor.accounts import Account, AccountClient, AccountService, create_account_store
from mentor.accounts.in_memory import InMemoryAccountStore
from mentor.accounts.service import check_password, hash_password
from mentor.accounts.sqlite import SQLiteAccountStore
from mentor.errors import AccountExists, AccountNotFound, AuthError, InvalidCredentials

SECRET = "test-secret"


def _service(store=None, **kwargs) -> AccountService:
    return AccountService(store or InMemoryAccountStore(), secret=SECRET, bcrypt_rounds=4, **kwargs)


class TestPasswordHashing:
    """Tests for bcrypt helpers."""

    def test_hash_is_salted(self):
        """Test that the same password hashes differently each time."""
        assert hash_password("pw", rounds=4) != hash_password("pw", rounds=4)

    def test_check_password(self):
        """Test verifying a password against its hash."""
        hashed = hash_password("secret", rounds=4)
        assert check_password("secret", hashed)
        assert not check_password("wrong", hashed)

    def test_malformed_hash(self):
        """Test that a malformed hash never matches."""
        assert not check_password("secret", "not-a-hash")


class TestAccountService:
    """Tests for signup, login and tokens."""

    @pytest.mark.asyncio
    async def test_signup_then_login(self):
        """Test that a registered account can log in."""
        service = _service()
        account = await service.signup("Ada", "ada@example.com", "pw")

        token = await service.login("ada@example.com", "pw")

        assert account.password_hash != "pw"
        assert service.verify_token(token) == account.id

    @pytest.mark.asyncio
    async def test_duplicate_signup(self):
        """Test that an email can only be registered once."""
        service = _service()
        await service.signup("Ada", "ada@example.com", "pw")

        with pytest.raises(AccountExists, match="User already exists"):
            await service.signup("Other", "ada@example.com", "pw2")

    @pytest.mark.asyncio
    async def test_login_unknown_email(self):
        """Test login for an unregistered email."""
        with pytest.raises(AccountNotFound, match="User not found"):
            await _service().login("nobody@example.com", "pw")

    @pytest.mark.asyncio
    async def test_login_wrong_password(self):
        """Test login with a wrong password."""
        service = _service()
        await service.signup("Ada", "ada@example.com", "pw")

        with pytest.raises(InvalidCredentials, match="Invalid credentials"):
            await service.login("ada@example.com", "nope")

    def test_token_carries_id_and_expiry(self):
        """Test the token payload."""
        token = _service().issue_token("abc")
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["id"] == "abc"
        assert payload["exp"] - payload["iat"] == 3600

    def test_expired_token(self):
        """Test that expired tokens are rejected."""
        service = _service(token_ttl=timedelta(seconds=-1))
        with pytest.raises(InvalidCredentials, match="Invalid or expired token"):
            service.verify_token(service.issue_token("abc"))

    def test_forged_token(self):
        """Test that tokens signed with another secret are rejected."""
        forged = AccountService(InMemoryAccountStore(), secret="other").issue_token("abc")
        with pytest.raises(InvalidCredentials):
            _service().verify_token(forged)


class TestSQLiteAccountStore:
    """Tests for SQLiteAccountStore."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, tmp_path):
        """Test that accounts survive a reconnect."""
        path = tmp_path / "accounts.db"
        store = SQLiteAccountStore(path)
        await store.connect()
        account = Account(name="Ada", email="ada@example.com", password_hash="h")
        await store.create(account)
        await store.disconnect()

        reopened = SQLiteAccountStore(path)
        await reopened.connect()
        try:
            found = await reopened.find_by_email("ada@example.com")
            assert found == account
            assert await reopened.find_by_email("nobody@example.com") is None
        finally:
            await reopened.disconnect()

    @pytest.mark.asyncio
    async def test_duplicate_email(self, tmp_path):
        """Test that the unique email constraint maps to AccountExists."""
        store = SQLiteAccountStore(tmp_path / "accounts.db")
        await store.connect()
        try:
            await store.create(Account(name="A", email="a@example.com", password_hash="h"))
            with pytest.raises(AccountExists):
                await store.create(Account(name="B", email="a@example.com", password_hash="h"))
        finally:
            await store.disconnect()


class TestCreateAccountStore:
    """Tests for create_account_store factory."""

    def test_create_memory(self):
        """Test creating the in-memory backend."""
        assert create_account_store("memory").backend_type == "memory"

    def test_create_sqlite(self, tmp_path):
        """Test creating the SQLite backend."""
        store = create_account_store("sqlite", path=tmp_path / "a.db")
        assert store.backend_type == "sqlite"

    def test_unsupported_backend_raises_error(self):
        """Test that unsupported backend raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported account backend"):
            create_account_store("mongodb")


class TestAccountClient:
    """Tests for AccountClient against a mock transport."""

    def _client(self, handler) -> AccountClient:
        return AccountClient("http://mentor.test", transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_signup(self):
        """Test that signup posts the form and returns the message."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"message": "Signup successful"})

        async with self._client(handler) as client:
            assert await client.signup("Ada", "ada@example.com", "pw") == "Signup successful"

        assert seen["path"] == "/api/signup"
        assert seen["body"] == {"name": "Ada", "email": "ada@example.com", "password": "pw"}

    @pytest.mark.asyncio
    async def test_login_returns_token(self):
        """Test that login returns the server's token."""
        def handler(request):
            return httpx.Response(200, json={"message": "Login successful", "token": "t0k"})

        async with self._client(handler) as client:
            assert await client.login("ada@example.com", "pw") == "t0k"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,exc", [
        ("User already exists", AccountExists),
        ("User not found", AccountNotFound),
        ("Invalid credentials", InvalidCredentials),
        ("Signup failed", AuthError),
    ])
    async def test_server_errors_are_mapped(self, error, exc):
        """Test that the server's error strings map to exceptions."""
        async with self._client(lambda r: httpx.Response(400, json={"error": error})) as client:
            with pytest.raises(exc, match=error):
                await client.signup("Ada", "ada@example.com", "pw")

    @pytest.mark.asyncio
    async def test_unreachable_server(self):
        """Test that transport failures become AuthError."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with self._client(handler) as client:
            with pytest.raises(AuthError, match="Could not reach"):
                await client.login("ada@example.com", "pw")
