# aura/modules/auth/schemas.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional
from aura.shared.enums import UserRole


# ── Register ──────────────────────────────────────────────

class RegisterIn(BaseModel):
    email:    EmailStr
    password: str = Field(..., min_length=6)
    name:     str = Field(..., min_length=2)


# ── Login ─────────────────────────────────────────────────

class LoginIn(BaseModel):
    email:    EmailStr
    password: str


# ── Tokens ───────────────────────────────────────────────

class TokenOut(BaseModel):
    access_token:  str
    refresh_token: str
    token_type:    str = "bearer"
    role:          UserRole
    user_id:       int


class RefreshIn(BaseModel):
    refresh_token: str


class AccessTokenOut(BaseModel):
    access_token: str
    token_type:   str = "bearer"


# ── Me ────────────────────────────────────────────────────

class MeOut(BaseModel):
    id:         int
    email:      str
    name:       str
    role:       UserRole
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
