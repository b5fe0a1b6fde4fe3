"""
main.py

Application entrypoint for the NikahFirst API.
- Initializes structured logging
- Sets up FastAPI application and middlewares
- Registers all API routers
- Integrates rate limiting via SlowAPI
- Adds common security headers
- Configures CORS
"""

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import Response

from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.limiter import limiter
from app.core.logging import init_logging

from app.admin.routes import router as admin_router
from app.auth.routes import router as auth_router
from app.catalog.routes import router as catalog_router
from app.finance.routes import router as finance_router
from app.lookup.routes import router as lookup_router
from app.moderation.routes import router as moderation_router
from app.notifications.routes import router as notifications_router
from app.profile.routes import photos_router
from app.profile.routes import router as profile_router
from app.suggestions.routes import router as suggestions_router
from app.users.routes import router as users_router
from app.wallet.routes import router as wallet_router


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(title="NikahFirst API")

# -----------------------------
# Middleware Configuration
# -----------------------------
init_logging()
app.state.limiter = limiter

register_exception_handlers(app)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)


# -----------------------------
# Security Headers Middleware
# -----------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add common security headers to responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# -----------------------------
# CORSMiddleware Configuration
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# API Router Registration
# -----------------------------
app.include_router(auth_router)
app.include_router(lookup_router)
app.include_router(wallet_router)
app.include_router(profile_router)
app.include_router(photos_router)
app.include_router(users_router)
app.include_router(admin_router)
app.include_router(notifications_router)
app.include_router(suggestions_router)
app.include_router(moderation_router)
app.include_router(finance_router)
app.include_router(catalog_router)


# -----------------------------
# Root Endpoint
# -----------------------------
@app.get("/", response_class=HTMLResponse)
async def home() -> Any:
    return """
    <html>
        <head>
            <title>NikahFirst API</title>
        </head>
        <body style="font-family: Arial, sans-serif; text-align: center; padding-top: 50px;">
            <h1>Welcome to <span style="color: #047857;">NikahFirst</span></h1>
            <p>Matrimonial profiles, credits and back-office API.</p>
        </body>
    </html>
    """
