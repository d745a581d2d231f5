"""
Intake workflow: turns an artist's validated draft into a stored submission.

File attachment is two-phase. The client first posts each file to an upload
endpoint and receives a url, then embeds those urls in the draft it submits.
Uploaded bytes are checked and discarded; the urls are placeholders.
"""

from __future__ import annotations

import logging
import os
import re
import uuid
from typing import Optional

from prism_portal.errors import ValidationError
from prism_portal.models import (
    ArtistProfiles,
    Artwork,
    AudioFile,
    StreamingLinks,
    Submission,
    SubmissionDraft,
    Track,
)
from prism_portal.schemas import SubmissionCreateRequest
from prism_portal.store import SubmissionStore

logger = logging.getLogger(__name__)

_MAX_FILE_BYTES_DEFAULT = 50 * 1024 * 1024  # 50MB

UPLOAD_KINDS = ("audio", "artwork")


def _media_base_url() -> str:
    return (os.getenv("MEDIA_BASE_URL", "https://example.com").strip() or "https://example.com").rstrip("/")


def _max_file_bytes() -> int:
    try:
        return int(os.getenv("MAX_UPLOAD_BYTES", str(_MAX_FILE_BYTES_DEFAULT)))
    except ValueError:
        return _MAX_FILE_BYTES_DEFAULT


def _sanitize_filename(name: str, fallback: str) -> str:
    # Letters, numbers, dot, dash, underscore.
    name = name.strip().replace("\\", "_").replace("/", "_")
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", name)
    return name or fallback


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value or None


def _validate_upload(kind: str, content_type: str, size_bytes: int) -> None:
    """
    Basic upload validation.

    We accept:
    - audio: Content-Type audio/* OR application/octet-stream (some browsers)
    - artwork: Content-Type image/*
    """
    if kind not in UPLOAD_KINDS:
        raise ValidationError(f"Invalid file type {kind!r}; expected 'audio' or 'artwork'.")

    content_type = (content_type or "").lower()
    if kind == "audio":
        if content_type and not (content_type.startswith("audio/") or "application/octet-stream" in content_type):
            raise ValidationError("Please upload an audio file.")
    elif not content_type.startswith("image/"):
        raise ValidationError("Please upload an image file.")

    if size_bytes <= 0:
        raise ValidationError("Empty file.")
    if size_bytes > _max_file_bytes():
        raise ValidationError("File too large.")


class IntakeWorkflow:
    """Public-facing controller that assembles and submits drafts."""

    def __init__(self, store: SubmissionStore) -> None:
        self._store = store

    # PUBLIC_INTERFACE
    def issue_upload_url(self, kind: str, filename: Optional[str], content_type: Optional[str], size_bytes: int) -> str:
        """
        Validate an uploaded file and return the placeholder url it will be referenced by.

        Returns:
            `{MEDIA_BASE_URL}/{kind}/{uuid}_{sanitized filename}`
        """
        _validate_upload(kind, content_type or "", size_bytes)
        fallback = "upload.mp3" if kind == "audio" else "artwork.jpg"
        safe_name = _sanitize_filename(filename or "", fallback)
        url = f"{_media_base_url()}/{kind}/{uuid.uuid4().hex}_{safe_name}"
        logger.info("upload_accepted: kind=%s filename=%s size_bytes=%s", kind, safe_name, size_bytes)
        return url

    # PUBLIC_INTERFACE
    def build_draft(self, req: SubmissionCreateRequest) -> SubmissionDraft:
        """
        Normalize a validated request into a store draft.

        Each track gets a stable id and `track_number = position + 1`; a blank
        audio-file title falls back to the track title. Blank optional text
        fields become None.
        """
        if not req.tracks:
            raise ValidationError("At least one track is required.")

        tracks = [
            Track(
                id=uuid.uuid4().hex,
                title=t.title,
                version=_blank_to_none(t.version),
                featured_artist=_blank_to_none(t.featured_artist),
                isrc=_blank_to_none(t.isrc),
                upc=_blank_to_none(t.upc),
                audio_file=AudioFile(
                    url=t.audio_file.url,
                    title=t.audio_file.title or t.title,
                    track_number=i + 1,
                ),
            )
            for i, t in enumerate(req.tracks)
        ]

        artwork = None
        if req.artwork is not None:
            artwork = Artwork(url=req.artwork.url, name=req.artwork.name or "artwork")

        profiles = None
        if req.featured_artist_profiles is not None:
            profiles = ArtistProfiles(
                spotify=_blank_to_none(req.featured_artist_profiles.spotify),
                apple_music=_blank_to_none(req.featured_artist_profiles.apple_music),
                youtube=_blank_to_none(req.featured_artist_profiles.youtube),
            )

        links = None
        if req.streaming_links is not None:
            links = StreamingLinks(
                spotify=_blank_to_none(req.streaming_links.spotify),
                apple_music=_blank_to_none(req.streaming_links.apple_music),
                youtube_music=_blank_to_none(req.streaming_links.youtube_music),
            )

        return SubmissionDraft(
            artist_name=req.artist_name,
            email=str(req.email),
            genre=req.genre,
            language=req.language,
            release_type=req.release_type,
            release_title=req.release_title,
            release_date=req.release_date,
            writer_composer=req.writer_composer,
            tracks=tracks,
            artwork=artwork,
            version=_blank_to_none(req.version),
            production_name=_blank_to_none(req.production_name),
            featured_artist=_blank_to_none(req.featured_artist),
            featured_artist_type=req.featured_artist_type,
            featured_artist_profiles=profiles,
            streaming_links=links,
            enable_youtube_content_id=req.enable_youtube_content_id,
            previously_released=req.previously_released,
            previous_upc=_blank_to_none(req.previous_upc),
            previous_isrc=_blank_to_none(req.previous_isrc),
        )

    # PUBLIC_INTERFACE
    def submit(self, req: SubmissionCreateRequest) -> Submission:
        """Create a pending submission from an artist's draft."""
        return self._store.create(self.build_draft(req))
