"""
Upload endpoints (public):
- POST /upload/audio (multipart audio file)
- POST /upload/artwork (multipart image file)

Files are validated and discarded; the returned url is a placeholder to embed
in the submission draft.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from prism_portal.deps import get_intake
from prism_portal.intake import IntakeWorkflow
from prism_portal.schemas import UploadResponse

router = APIRouter(prefix="/upload", tags=["Uploads"])


def _issue(kind: str, file: UploadFile, intake: IntakeWorkflow) -> UploadResponse:
    content = file.file.read()
    url = intake.issue_upload_url(kind, file.filename, file.content_type, len(content))
    return UploadResponse(url=url)


@router.post(
    "/audio",
    response_model=UploadResponse,
    summary="Upload an audio file",
    description="Accepts audio/* (or application/octet-stream) and returns a url for the draft.",
    operation_id="upload_audio",
)
def upload_audio(
    file: UploadFile = File(..., description="Audio file upload (multipart/form-data)"),
    intake: IntakeWorkflow = Depends(get_intake),
) -> UploadResponse:
    return _issue("audio", file, intake)


@router.post(
    "/artwork",
    response_model=UploadResponse,
    summary="Upload artwork",
    description="Accepts image/* and returns a url for the draft.",
    operation_id="upload_artwork",
)
def upload_artwork(
    file: UploadFile = File(..., description="Image file upload (multipart/form-data)"),
    intake: IntakeWorkflow = Depends(get_intake),
) -> UploadResponse:
    return _issue("artwork", file, intake)
