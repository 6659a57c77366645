"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS (le front peut être servi depuis une autre origine).
- register_security_middleware: en-têtes de sécurité et CSP compatible Stripe.js.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront import config

STRIPE_JS_SOURCES = ["https://js.stripe.com", "https://checkout.stripe.com"]

def register_basic_middlewares(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials="*" not in config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)

        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")

        stripe_sources = " ".join(STRIPE_JS_SOURCES)
        csp = (
            "default-src 'self'; "
            "base-uri 'self'; object-src 'none'; frame-ancestors 'none'; "
            "img-src 'self' data: blob:; "
            "style-src 'self' 'unsafe-inline'; "
            f"script-src 'self' 'unsafe-inline' {stripe_sources}; "
            f"frame-src {stripe_sources}; "
            f"connect-src 'self' {stripe_sources}"
        )
        response.headers.setdefault("Content-Security-Policy", csp)
        return response
