"""
FastAPI application entrypoint for the Prism submission portal.

Public:
- POST /upload/audio, POST /upload/artwork
- POST /submissions
- GET /faqs

Team only (Bearer token of a team account):
- GET/PATCH /submissions..., attachment deletion and download urls
- FAQ management

CORS is enabled for local development (http://localhost:3000) and can be extended
via environment variables.
"""

from __future__ import annotations

import logging
import os as _os
import threading
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prism_portal.auth import seed_team_member
from prism_portal.errors import PortalError
from prism_portal.faqs import FaqStore
from prism_portal.intake import IntakeWorkflow
from prism_portal.review import ReviewWorkflow
from prism_portal.routes_auth import router as auth_router
from prism_portal.routes_faqs import router as faqs_router
from prism_portal.routes_submissions import router as submissions_router
from prism_portal.routes_uploads import router as uploads_router
from prism_portal.store import SubmissionStore
from prism_portal.users import UserStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Submissions", "description": "Release intake (public) and review (team)."},
    {"name": "Uploads", "description": "Placeholder file uploads for submission drafts (public)."},
    {"name": "Auth", "description": "Login and registration."},
    {"name": "FAQs", "description": "Home page FAQ list."},
    {"name": "Health", "description": "Service health and basic runtime info."},
]


def _review_page_size() -> int:
    try:
        return max(1, int(_os.getenv("REVIEW_PAGE_SIZE", "10")))
    except ValueError:
        return 10


def _cors_origins() -> list:
    # credentials=true requires explicit origins (not '*') in browsers, so we include common local dev URLs.
    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    raw = _os.getenv("CORS_ALLOW_ORIGINS") or _os.getenv("ALLOWED_ORIGINS", "")
    origins.extend(o.strip() for o in raw.split(",") if o.strip())
    return origins


async def _portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("portal_error: path=%s exc=%s", request.url.path, exc.__class__.__name__)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "error": "validation_error",
                "message": "Invalid request data.",
                "fields": jsonable_encoder(exc.errors()),
            }
        },
    )


# PUBLIC_INTERFACE
def create_app(
    *,
    submissions: Optional[SubmissionStore] = None,
    users: Optional[UserStore] = None,
    faqs: Optional[FaqStore] = None,
) -> FastAPI:
    """
    Build the application and the stores it owns.

    Stores may be passed in (tests do this to control clocks); otherwise fresh
    in-memory stores are created. All data is lost when the process exits.
    """
    app = FastAPI(
        title="Prism Portal API",
        description=(
            "Artist music-submission portal.\n\n"
            "Authentication: Bearer JWT from POST /auth/login; review endpoints require a team account.\n\n"
            "Storage: in-memory only."
        ),
        version="1.0.0",
        openapi_tags=openapi_tags,
    )

    # One lock guards the submission map.
    submissions = submissions if submissions is not None else SubmissionStore(lock=threading.RLock())
    users = users if users is not None else UserStore()
    faqs = faqs if faqs is not None else FaqStore()

    app.state.submissions = submissions
    app.state.users = users
    app.state.faqs = faqs
    app.state.intake = IntakeWorkflow(submissions)
    app.state.review = ReviewWorkflow(submissions, page_size=_review_page_size())

    seed_team_member(users)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count", "X-Total-Pages"],
    )

    app.add_exception_handler(PortalError, _portal_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(auth_router)
    app.include_router(uploads_router)
    app.include_router(submissions_router)
    app.include_router(faqs_router)

    @app.get(
        "/",
        summary="Health check",
        description="Simple health check endpoint.",
        tags=["Health"],
    )
    def health_check():
        """Return basic service health information."""
        return {"status": "ok"}

    return app


app = create_app()
