# aura/modules/auth/service.py
from typing import Dict, Optional

from jose import JWTError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from aura.core.security import (
    hash_password, verify_password,
    create_access_token, create_refresh_token, decode_token,
)
from aura.modules.auth.schemas import RegisterIn, LoginIn, TokenOut
from aura.shared.enums import UserRole
from aura.shared.errors import Conflict, Forbidden, Unauthorized
from aura.shared.models import User


class AuthService:

    # ── Register ─────────────────────────────────────────────

    async def register(self, db: AsyncSession, payload: RegisterIn) -> TokenOut:
        if await self._find(db, User.email == payload.email):
            raise Conflict("Email already registered")

        user = User(
            email=payload.email,
            name=payload.name,
            hashed_password=hash_password(payload.password),
            role=UserRole.USER,
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError as e:
            # concurrent registration with the same email won the unique index
            await db.rollback()
            raise Conflict("Email already registered") from e
        await db.refresh(user)
        return self._issue(user)

    # ── Login ─────────────────────────────────────────────────

    async def login(self, db: AsyncSession, payload: LoginIn) -> TokenOut:
        user = await self._find(db, User.email == payload.email)
        # same message for unknown email and wrong password
        if user is None or not verify_password(payload.password, user.hashed_password):
            raise Unauthorized("Incorrect email or password")
        if not user.is_active:
            raise Forbidden("Account disabled")
        return self._issue(user)

    # ── Refresh ───────────────────────────────────────────────

    async def refresh(self, db: AsyncSession, refresh_token: str) -> Dict[str, str]:
        """Trades a refresh token for a new access token; the refresh token stays valid."""
        try:
            claims = decode_token(refresh_token)
            user_id = int(claims["sub"]) if claims.get("type") == "refresh" else None
        except (JWTError, ValueError, KeyError):
            user_id = None
        if user_id is None:
            raise Unauthorized("Invalid refresh token")

        user = await self._find(db, User.id == user_id)
        if user is None or not user.is_active:
            raise Unauthorized("User not found")

        return {
            "access_token": create_access_token(_claims(user)),
            "token_type": "bearer",
        }

    # ── Private ───────────────────────────────────────────────

    async def _find(self, db: AsyncSession, condition) -> Optional[User]:
        result = await db.execute(select(User).where(condition))
        return result.scalar_one_or_none()

    def _issue(self, user: User) -> TokenOut:
        claims = _claims(user)
        return TokenOut(
            access_token=create_access_token(claims),
            refresh_token=create_refresh_token(claims),
            role=user.role,
            user_id=user.id,
        )


def _claims(user: User) -> Dict[str, str]:
    role = user.role.value if isinstance(user.role, UserRole) else str(user.role)
    return {"sub": str(user.id), "role": role}
