"""
Submission endpoints:
- POST /submissions (public intake)
- GET /submissions (team; filter/sort/paginate)
- GET /submissions/{id} (team)
- PATCH /submissions/{id} (team; approve or decline)
- DELETE /submissions/{id}/artwork (team)
- DELETE /submissions/{id}/tracks/{index} (team)
- DELETE /submissions/{id}/track-attachments/{track_id} (team)
- GET /submissions/{id}/tracks/{index}/download (team)
- GET /submissions/{id}/artwork/download (team)

Domain errors (NotFound, InvalidStatus, ...) propagate to the handlers
registered in `create_app`.
"""

from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from prism_portal.auth import require_team_member
from prism_portal.deps import get_intake, get_review
from prism_portal.intake import IntakeWorkflow
from prism_portal.models import User
from prism_portal.review import ReviewWorkflow
from prism_portal.schemas import (
    DownloadUrlResponse,
    StatusUpdateRequest,
    SubmissionCreateRequest,
    SubmissionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["Submissions"])


@router.post(
    "",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a release",
    description="Public intake. Track and artwork urls come from the /upload endpoints.",
    operation_id="create_submission",
)
def create_submission(
    req: SubmissionCreateRequest,
    intake: IntakeWorkflow = Depends(get_intake),
) -> SubmissionResponse:
    """Create a pending submission (public)."""
    submission = intake.submit(req)
    return SubmissionResponse.model_validate(submission)


@router.get(
    "",
    response_model=List[SubmissionResponse],
    summary="List submissions",
    description=(
        "Team only. Filters by status and by a case-insensitive search over artist name "
        "and release title. Sorting by status is alphabetical. When `page` is given the "
        "result is paginated; totals are returned in X-Total-Count / X-Total-Pages."
    ),
    operation_id="list_submissions",
)
def list_submissions(
    response: Response,
    status_filter: Literal["all", "pending", "approved", "declined"] = Query("all", alias="status"),
    search: str = Query("", description="Matches artist name or release title."),
    sort: Literal["date", "status"] = Query("date"),
    order: Literal["asc", "desc"] = Query("desc"),
    page: Optional[int] = Query(None, ge=1, description="1-indexed page number."),
    page_size: Optional[int] = Query(None, ge=1, le=100, alias="pageSize"),
    review: ReviewWorkflow = Depends(get_review),
    _: User = Depends(require_team_member),
) -> List[SubmissionResponse]:
    result = review.query(
        status=status_filter,
        search=search,
        sort=sort,
        order=order,
        page=page,
        page_size=page_size,
    )
    response.headers["X-Total-Count"] = str(result.total)
    response.headers["X-Total-Pages"] = str(result.total_pages)
    return [SubmissionResponse.model_validate(s) for s in result.items]


@router.get(
    "/{submission_id}",
    response_model=SubmissionResponse,
    summary="Get a submission",
    operation_id="get_submission",
)
def get_submission(
    submission_id: int,
    review: ReviewWorkflow = Depends(get_review),
    _: User = Depends(require_team_member),
) -> SubmissionResponse:
    return SubmissionResponse.model_validate(review.get(submission_id))


@router.patch(
    "/{submission_id}",
    response_model=SubmissionResponse,
    summary="Approve or decline a submission",
    description="Only pending submissions can be decided; re-sending the current decision is a no-op.",
    operation_id="update_submission_status",
)
def update_submission_status(
    submission_id: int,
    req: StatusUpdateRequest,
    review: ReviewWorkflow = Depends(get_review),
    user: User = Depends(require_team_member),
) -> SubmissionResponse:
    submission = review.set_status(submission_id, req.status)
    logger.info("review_decision: submission_id=%s status=%s by=%s", submission_id, submission.status.value, user.username)
    return SubmissionResponse.model_validate(submission)


@router.delete(
    "/{submission_id}/artwork",
    response_model=SubmissionResponse,
    summary="Delete artwork",
    operation_id="delete_submission_artwork",
)
def delete_artwork(
    submission_id: int,
    review: ReviewWorkflow = Depends(get_review),
    _: User = Depends(require_team_member),
) -> SubmissionResponse:
    return SubmissionResponse.model_validate(review.delete_artwork(submission_id))


@router.delete(
    "/{submission_id}/tracks/{index}",
    response_model=SubmissionResponse,
    summary="Delete a track by position",
    description="Later tracks shift down by one; do not reuse indices across deletions.",
    operation_id="delete_submission_track",
)
def delete_track(
    submission_id: int,
    index: int,
    review: ReviewWorkflow = Depends(get_review),
    _: User = Depends(require_team_member),
) -> SubmissionResponse:
    return SubmissionResponse.model_validate(review.delete_track(submission_id, index))


@router.delete(
    "/{submission_id}/track-attachments/{track_id}",
    response_model=SubmissionResponse,
    summary="Delete a track by attachment id",
    operation_id="delete_submission_track_attachment",
)
def delete_track_attachment(
    submission_id: int,
    track_id: str,
    review: ReviewWorkflow = Depends(get_review),
    _: User = Depends(require_team_member),
) -> SubmissionResponse:
    return SubmissionResponse.model_validate(review.delete_track_by_id(submission_id, track_id))


@router.get(
    "/{submission_id}/tracks/{index}/download",
    response_model=DownloadUrlResponse,
    summary="Track download url",
    operation_id="download_submission_track",
)
def download_track(
    submission_id: int,
    index: int,
    review: ReviewWorkflow = Depends(get_review),
    _: User = Depends(require_team_member),
) -> DownloadUrlResponse:
    return DownloadUrlResponse(download_url=review.track_download_url(submission_id, index))


@router.get(
    "/{submission_id}/artwork/download",
    response_model=DownloadUrlResponse,
    summary="Artwork download url",
    operation_id="download_submission_artwork",
)
def download_artwork(
    submission_id: int,
    review: ReviewWorkflow = Depends(get_review),
    _: User = Depends(require_team_member),
) -> DownloadUrlResponse:
    return DownloadUrlResponse(download_url=review.artwork_download_url(submission_id))
