"""Request and response bodies of the HTTP API."""

from pydantic import BaseModel


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class AskRequest(BaseModel):
    prompt: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str


class AskResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str
