"""Session identity: the email cached by the login flow.

There are no passwords here; whoever holds the cookie is that user. The
cookie plays the role the browser's local storage plays for a client-only page.
"""

from __future__ import annotations

from fastapi import Request, Response

USER_EMAIL_COOKIE = "userEmail"
COOKIE_MAX_AGE_DAYS = 30
LOGIN_PATH = "/login"


def get_cached_email(request: Request) -> str | None:
    email = request.cookies.get(USER_EMAIL_COOKIE, "").strip()
    return email or None


def remember_email(response: Response, email: str) -> None:
    response.set_cookie(
        USER_EMAIL_COOKIE,
        email,
        max_age=COOKIE_MAX_AGE_DAYS * 24 * 3600,
        httponly=True,
        samesite="lax",
    )


def forget_email(response: Response) -> None:
    response.delete_cookie(USER_EMAIL_COOKIE)
