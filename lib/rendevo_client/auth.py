from __future__ import annotations

from .models import (
    AuthResponse,
    ForgotPasswordDto,
    ForgotPasswordResponse,
    LoginDto,
    MessageResponse,
    RefreshTokenDto,
    RegisterDto,
    ResendVerificationDto,
    ResetPasswordDto,
    VerifyEmailDto,
)
from .resource import ApiResource


class AuthAPI(ApiResource):
    async def login(self, credentials: LoginDto) -> AuthResponse:
        data = await self._t.post("/auth/login", credentials)
        self.set_token(data["access_token"])
        return data

    async def register(self, user_data: RegisterDto) -> AuthResponse:
        data = await self._t.post("/auth/register", user_data)
        self.set_token(data["access_token"])
        self.set_refresh_token(data["refresh_token"])
        return data

    async def refresh(self, data: RefreshTokenDto) -> AuthResponse:
        response = await self._t.post("/auth/refresh", data)
        self.set_token(response["access_token"])
        self.set_refresh_token(response["refresh_token"])
        return response

    async def forgot_password(self, data: ForgotPasswordDto) -> ForgotPasswordResponse:
        return await self._t.post("/auth/forgot-password", data)

    async def reset_password(self, data: ResetPasswordDto) -> MessageResponse:
        return await self._t.post("/auth/reset-password", data)

    async def verify_email(self, data: VerifyEmailDto) -> MessageResponse:
        return await self._t.post("/auth/verify-email", data)

    async def resend_verification(self, data: ResendVerificationDto) -> MessageResponse:
        return await self._t.post("/auth/resend-verification", data)

    async def logout(self, data: RefreshTokenDto) -> MessageResponse:
        # Tokens are only dropped once the server accepted the logout; on failure
        # the caller keeps them and may retry.
        response = await self._t.post("/auth/logout", data)
        self.clear_token()
        self.clear_refresh_token()
        return response
