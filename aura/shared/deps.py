# aura/shared/deps.py
"""
Reusable FastAPI dependencies for every router.
Injected through Depends(): never called directly.

The stateful helpers (question supply with its cache, AI client,
performance tracker) are built once in main.lifespan and stored on
app.state; the *Dep aliases below hand them to routers so tests can
swap them through app.dependency_overrides.
"""
from typing import Annotated, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aura.core.database import get_db
from aura.core.security import decode_token
from aura.infra.ai_client import AIClient
from aura.infra.telemetry import PerformanceTracker
from aura.modules.assessment.supply import QuestionSupply
from aura.shared.enums import UserRole
from aura.shared.errors import Forbidden, Unauthorized
from aura.shared.models import User

# auto_error=False: a missing header is an Unauthorized raised below
bearer = HTTPBearer(auto_error=False)


async def _resolve_user(token: str, db: AsyncSession) -> Optional[User]:
    try:
        payload = decode_token(token)
    except JWTError:
        return None
    if payload.get("type") != "access" or payload.get("sub") is None:
        return None

    result = await db.execute(select(User).where(User.id == int(payload["sub"])))
    user = result.scalar_one_or_none()
    if not user or not user.is_active:
        return None
    return user


async def _get_user_from_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    user = await _resolve_user(credentials.credentials, db) if credentials else None
    if user is None:
        raise Unauthorized("Invalid or expired token")
    return user


# ── Public deps ────────────────────────────────────────────

async def get_current_user(
    user: Annotated[User, Depends(_get_user_from_token)],
) -> User:
    """Authenticated user (any role)."""
    return user


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Optional[User]:
    """User if a valid bearer token is present, None otherwise (telemetry)."""
    if credentials is None:
        return None
    return await _resolve_user(credentials.credentials, db)


async def get_current_admin(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Requires the ADMIN role."""
    if user.role != UserRole.ADMIN:
        raise Forbidden("Administrator access required")
    return user


def get_question_supply(request: Request) -> QuestionSupply:
    return request.app.state.question_supply


def get_ai_client(request: Request) -> AIClient:
    return request.app.state.ai_client


def get_tracker(request: Request) -> PerformanceTracker:
    return request.app.state.tracker


# ── Type aliases for routers ───────────────────────────────
DbDep             = Annotated[AsyncSession, Depends(get_db)]
UserDep           = Annotated[User, Depends(get_current_user)]
OptionalUserDep   = Annotated[Optional[User], Depends(get_optional_user)]
AdminDep          = Annotated[User, Depends(get_current_admin)]
QuestionSupplyDep = Annotated[QuestionSupply, Depends(get_question_supply)]
AIClientDep       = Annotated[AIClient, Depends(get_ai_client)]
TrackerDep        = Annotated[PerformanceTracker, Depends(get_tracker)]
