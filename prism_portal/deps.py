"""
FastAPI dependencies that hand route handlers the stores and workflows owned by
the application (see `create_app`).
"""

from __future__ import annotations

from fastapi import Request

from prism_portal.faqs import FaqStore
from prism_portal.intake import IntakeWorkflow
from prism_portal.review import ReviewWorkflow


# PUBLIC_INTERFACE
def get_intake(request: Request) -> IntakeWorkflow:
    return request.app.state.intake


# PUBLIC_INTERFACE
def get_review(request: Request) -> ReviewWorkflow:
    return request.app.state.review


# PUBLIC_INTERFACE
def get_faq_store(request: Request) -> FaqStore:
    return request.app.state.faqs
