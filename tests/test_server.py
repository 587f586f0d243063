"""Tests for the mentor HTTP API."""
import pytest
from fastapi.testclient import TestClient

from conftest import FakeCompletion
from mentor.accounts import AccountService
from mentor.accounts.in_memory import InMemoryAccountStore
from mentor.server import ServerSettings, create_app
from mentor.server.app import build_completion_service

SECRET = "test-secret"


def _client(completion=None, require_auth: bool = False, no_llm: bool = False) -> TestClient:
    settings = ServerSettings(jwt_secret=SECRET, require_auth=require_auth, account_backend="memory")
    accounts = AccountService(InMemoryAccountStore(), secret=SECRET, bcrypt_rounds=4)
    if completion is None and not no_llm:
        completion = FakeCompletion()
    return TestClient(create_app(settings, accounts=accounts, completion=completion))


def _signup(client, email="ada@example.com", password="pw"):
    return client.post("/api/signup", json={"name": "Ada", "email": email, "password": password})


def _token(client) -> str:
    _signup(client)
    return client.post("/api/login", json={"email": "ada@example.com", "password": "pw"}).json()["token"]


class TestSignupLogin:
    """Tests for /api/signup and /api/login."""

    def test_signup(self):
        """Test registering a new account."""
        with _client() as client:
            response = _signup(client)

        assert response.status_code == 200
        assert response.json() == {"message": "Signup successful"}

    def test_duplicate_signup(self):
        """Test that registering the same email twice fails."""
        with _client() as client:
            _signup(client)
            response = _signup(client)

        assert response.status_code == 400
        assert response.json() == {"error": "User already exists"}

    def test_login(self):
        """Test logging in with the right password."""
        with _client() as client:
            _signup(client)
            response = client.post("/api/login", json={"email": "ada@example.com", "password": "pw"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["token"]

    @pytest.mark.parametrize("email,password,error", [
        ("nobody@example.com", "pw", "User not found"),
        ("ada@example.com", "wrong", "Invalid credentials"),
    ])
    def test_login_failures(self, email, password, error):
        """Test login error messages."""
        with _client() as client:
            _signup(client)
            response = client.post("/api/login", json={"email": email, "password": password})

        assert response.status_code == 400
        assert response.json() == {"error": error}

    def test_invalid_body(self):
        """Test that a body missing fields is a 400 with an error field."""
        with _client() as client:
            response = client.post("/api/signup", json={"email": "ada@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}


class TestAsk:
    """Tests for /api/ask."""

    def test_ask_returns_response(self):
        """Test forwarding a prompt to the completion service."""
        completion = FakeCompletion("Hi there!")
        with _client(completion) as client:
            response = client.post("/api/ask", json={"prompt": "Hello"})

        assert response.status_code == 200
        assert response.json() == {"response": "Hi there!"}
        assert completion.prompts == ["Hello"]

    def test_completion_failure(self):
        """Test that provider failures are a 500 with the message."""
        with _client(FakeCompletion(error="quota exceeded")) as client:
            response = client.post("/api/ask", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.json() == {"error": "quota exceeded"}

    def test_no_provider_configured(self):
        """Test the error when no LLM is configured."""
        with _client(no_llm=True) as client:
            response = client.post("/api/ask", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.json() == {"error": "LLM provider not configured"}

    def test_valid_token_is_accepted(self):
        """Test that a login token is accepted."""
        with _client(require_auth=True) as client:
            token = _token(client)
            response = client.post(
                "/api/ask", json={"prompt": "Hello"}, headers={"Authorization": f"Bearer {token}"}
            )

        assert response.status_code == 200

    def test_bad_token_is_rejected(self):
        """Test that a forged token is refused even when auth is optional."""
        with _client() as client:
            response = client.post(
                "/api/ask", json={"prompt": "Hello"}, headers={"Authorization": "Bearer forged"}
            )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_auth_required(self):
        """Test that anonymous calls are refused when auth is required."""
        completion = FakeCompletion()
        with _client(completion, require_auth=True) as client:
            response = client.post("/api/ask", json={"prompt": "Hello"})

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}
        assert completion.prompts == []

    def test_completion_closed_on_shutdown(self):
        """Test that the completion service is closed with the app."""
        completion = FakeCompletion()
        with _client(completion):
            pass
        assert completion.closed


class TestServerSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test the settings used without any environment."""
        for name in ("MENTOR_PORT", "LLM_PROVIDER", "GEMINI_API_KEY", "MENTOR_REQUIRE_AUTH", "JWT_SECRET"):
            monkeypatch.delenv(name, raising=False)

        settings = ServerSettings.from_env()

        assert settings.port == 5000
        assert settings.llm_provider == "gemini"
        assert settings.llm_api_key is None
        assert settings.require_auth is False

    def test_openai_from_env(self, monkeypatch):
        """Test selecting OpenAI through the environment."""
        monkeypatch.setenv("LLM_PROVIDER", "openai")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_CHAT_MODEL", "gpt-4o")
        monkeypatch.setenv("MENTOR_REQUIRE_AUTH", "true")
        monkeypatch.setenv("MENTOR_CORS_ORIGIN", "http://a.test, http://b.test")

        settings = ServerSettings.from_env()

        assert settings.llm_api_key == "sk-test"
        assert settings.llm_model == "gpt-4o"
        assert settings.require_auth is True
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_no_api_key_means_no_completion(self):
        """Test that /api/ask is disabled without an API key."""
        assert build_completion_service(ServerSettings(llm_api_key=None)) is None
