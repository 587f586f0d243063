"""FastAPI application for the mentor backend.

Three endpoints: signup, login, and ask (forward a prompt to the LLM).
Failures are reported as ``{"error": "..."}`` bodies.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..accounts import AccountService, create_account_store
from ..completion import CompletionService, ProviderCompletionService
from ..errors import AccountExists, AuthError, CompletionError
from ..llm import create_llm_provider
from .config import ServerSettings
from .schemas import (
    AskRequest,
    AskResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def build_completion_service(settings: ServerSettings) -> CompletionService | None:
    """Create the LLM-backed completion service, or None without an API key."""
    if not settings.llm_api_key:
        logger.warning("No API key for %s, /api/ask is disabled", settings.llm_provider)
        return None
    config = {"api_key": settings.llm_api_key}
    if settings.llm_model:
        config["model"] = settings.llm_model
    return ProviderCompletionService(create_llm_provider(settings.llm_provider, **config))


def create_app(
    settings: ServerSettings | None = None,
    accounts: AccountService | None = None,
    completion: CompletionService | None = None,
) -> FastAPI:
    """Build the mentor API.

    Args:
        settings: Server settings (read from the environment when omitted)
        accounts: Account service (built from settings when omitted)
        completion: Completion service (built from settings when omitted)
    """
    settings = settings or ServerSettings.from_env()
    if accounts is None:
        store_config = {"path": settings.account_db} if settings.account_backend == "sqlite" else {}
        store = create_account_store(settings.account_backend, **store_config)
        accounts = AccountService(store, secret=settings.jwt_secret)
    if completion is None:
        completion = build_completion_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await accounts.store.connect()
        logger.info("Account store connected (%s)", accounts.store.backend_type)
        try:
            yield
        finally:
            await accounts.store.disconnect()
            if completion is not None:
                await completion.close()

    app = FastAPI(title="AI Mentor", lifespan=lifespan)
    app.state.settings = settings
    app.state.accounts = accounts
    app.state.completion = completion

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "Invalid request body")

    @app.post("/api/signup", response_model=MessageResponse, responses={400: {"model": ErrorResponse}})
    async def signup(body: SignupRequest):
        try:
            await accounts.signup(body.name, body.email, body.password)
        except AccountExists as e:
            return _error(400, e.message)
        except Exception:
            logger.exception("Signup error")
            return _error(500, "Signup failed")
        return MessageResponse(message="Signup successful")

    @app.post("/api/login", response_model=LoginResponse, responses={400: {"model": ErrorResponse}})
    async def login(body: LoginRequest):
        try:
            token = await accounts.login(body.email, body.password)
        except AuthError as e:
            return _error(400, e.message)
        except Exception:
            logger.exception("Login error")
            return _error(500, "Login failed")
        return LoginResponse(message="Login successful", token=token)

    @app.post("/api/ask", response_model=AskResponse, responses={401: {"model": ErrorResponse}})
    async def ask(body: AskRequest, request: Request):
        authorization = request.headers.get("authorization", "")
        if authorization.lower().startswith("bearer "):
            try:
                accounts.verify_token(authorization[7:].strip())
            except AuthError as e:
                return _error(401, e.message)
        elif settings.require_auth:
            return _error(401, "Authentication required")

        if completion is None:
            return _error(500, "LLM provider not configured")
        try:
            text = await completion.complete(body.prompt)
        except CompletionError as e:
            logger.error("LLM error: %s", e.message)
            return _error(500, e.message)
        return AskResponse(response=text)

    return app
