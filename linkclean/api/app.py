"""FastAPI application factory.

Routers
-------
    /clean  — clean text, optionally with the change report
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkclean.api.routers import clean as clean_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Link Cleaner API",
        description=(
            "Strips tracking parameters and referral path segments from "
            "links embedded in free-form text."
        ),
        version="0.1.0",
    )

    # Browser frontends paste text from any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(clean_router.router, prefix="/clean", tags=["clean"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn linkclean.api.app:app --reload
app = create_app()
