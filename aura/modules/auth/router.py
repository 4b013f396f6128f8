# aura/modules/auth/router.py
from fastapi import APIRouter
from aura.modules.auth.schemas import (
    RegisterIn, LoginIn, TokenOut, RefreshIn, AccessTokenOut, MeOut,
)
from aura.modules.auth.service import AuthService
from aura.shared.deps import DbDep, UserDep

router = APIRouter(prefix="/auth", tags=["Auth"])
service = AuthService()


@router.post("/register", response_model=TokenOut, status_code=201)
async def register(payload: RegisterIn, db: DbDep):
    return await service.register(db, payload)


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, db: DbDep):
    return await service.login(db, payload)


@router.post("/refresh", response_model=AccessTokenOut)
async def refresh(payload: RefreshIn, db: DbDep):
    return await service.refresh(db, payload.refresh_token)


@router.get("/me", response_model=MeOut)
async def me(current_user: UserDep):
    return current_user
