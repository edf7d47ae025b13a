"""Thin API layer: registration, email confirmation, login."""
from __future__ import annotations

import re

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from snacksmart.db.session import get_db
from snacksmart.services import account_service

router = APIRouter(prefix="/auth", tags=["auth"])

_PASSWORD_RULES = (
    (re.compile(r'[!@#$%^&*(),.?":{}|<>]'), "Must include at least one special character"),
    (re.compile(r"[A-Z]"), "Must include an uppercase letter"),
    (re.compile(r"[a-z]"), "Must include a lowercase letter"),
    (re.compile(r"[0-9]"), "Must include a number"),
)


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName", min_length=3, max_length=50)
    last_name: str = Field(..., alias="lastName", min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        for pattern, message in _PASSWORD_RULES:
            if not pattern.search(v):
                raise ValueError(message)
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest):
    with get_db() as db:
        account_service.register_user(db, body.first_name, body.last_name, body.email, body.password)
    return {"message": "Account created. Confirmation email sent."}


@router.get("/confirm")
def confirm(token: str = Query(..., min_length=1)):
    with get_db() as db:
        account_service.confirm_email(db, token)
    return {"message": "Email confirmed"}


@router.post("/login")
def login(body: LoginRequest):
    with get_db() as db:
        return account_service.login(db, body.email, body.password)
