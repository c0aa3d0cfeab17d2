from __future__ import annotations

from enum import Enum
from typing import NotRequired, TypedDict


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(TypedDict):
    id: str
    email: str
    firstName: str
    lastName: str
    isActive: bool
    emailVerifiedAt: str | None
    role: Role
    createdAt: str
    updatedAt: str


class UpdateUserDto(TypedDict, total=False):
    email: str
    firstName: str
    lastName: str
    isActive: bool


class AuthResponse(TypedDict):
    access_token: str
    refresh_token: str
    user: User


class LoginDto(TypedDict):
    email: str
    password: str


class RegisterDto(TypedDict):
    email: str
    password: str
    firstName: str
    lastName: str


class RefreshTokenDto(TypedDict):
    refreshToken: str


class ForgotPasswordDto(TypedDict):
    email: str


class ResetPasswordDto(TypedDict):
    token: str
    newPassword: str


class VerifyEmailDto(TypedDict):
    token: str


class ResendVerificationDto(TypedDict):
    email: str


class MessageResponse(TypedDict):
    message: str


class ForgotPasswordResponse(TypedDict):
    message: str
    token: NotRequired[str]
