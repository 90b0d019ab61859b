"""Login flow: cache or clear the user's email."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from app.schemas import LoginRequest
from app.services.auth import remember_email, forget_email

router = APIRouter(prefix="/api/session", tags=["session"])


@router.post("/login")
async def login(body: LoginRequest):
    email = body.email.strip()
    if not email:
        raise HTTPException(400, "Email is required")
    response = JSONResponse({"email": email})
    remember_email(response, email)
    return response


@router.post("/logout")
async def logout():
    response = JSONResponse({"ok": True})
    forget_email(response)
    return response
