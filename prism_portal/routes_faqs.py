"""
FAQ endpoints:
- GET /faqs (public)
- POST /faqs, PUT /faqs/{id}, DELETE /faqs/{id} (team)
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from prism_portal.auth import require_team_member
from prism_portal.deps import get_faq_store
from prism_portal.faqs import FaqStore
from prism_portal.models import User
from prism_portal.schemas import FaqCreateRequest, FaqResponse, FaqUpdateRequest

router = APIRouter(prefix="/faqs", tags=["FAQs"])


@router.get("", response_model=List[FaqResponse], summary="List FAQs", operation_id="list_faqs")
def list_faqs(faqs: FaqStore = Depends(get_faq_store)) -> List[FaqResponse]:
    return [FaqResponse.model_validate(f) for f in faqs.list()]


@router.post(
    "",
    response_model=FaqResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a FAQ",
    operation_id="create_faq",
)
def create_faq(
    req: FaqCreateRequest,
    faqs: FaqStore = Depends(get_faq_store),
    _: User = Depends(require_team_member),
) -> FaqResponse:
    return FaqResponse.model_validate(faqs.create(question=req.question, answer=req.answer, position=req.position))


@router.put("/{faq_id}", response_model=FaqResponse, summary="Update a FAQ", operation_id="update_faq")
def update_faq(
    faq_id: int,
    req: FaqUpdateRequest,
    faqs: FaqStore = Depends(get_faq_store),
    _: User = Depends(require_team_member),
) -> FaqResponse:
    faq = faqs.update(faq_id, question=req.question, answer=req.answer, position=req.position)
    return FaqResponse.model_validate(faq)


@router.delete(
    "/{faq_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a FAQ",
    operation_id="delete_faq",
)
def delete_faq(
    faq_id: int,
    faqs: FaqStore = Depends(get_faq_store),
    _: User = Depends(require_team_member),
) -> Response:
    faqs.delete(faq_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
