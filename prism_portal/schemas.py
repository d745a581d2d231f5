"""
Pydantic models (request/response shapes) for API endpoints.

Submission payloads use camelCase on the wire (artistName, audioFile, ...) and
accept snake_case too. Auth payloads keep the plain field names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from prism_portal.models import ReleaseType, Role, SubmissionStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class DraftModel(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)


# Auth


class AuthRegisterRequest(BaseModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=64)] = Field(
        ..., description="Unique username; surrounding whitespace is ignored."
    )
    password: str = Field(..., min_length=6, description="User password (min 6 chars).")


class AuthLoginRequest(BaseModel):
    username: str = Field(..., description="Username.")
    password: str = Field(..., description="User password.")


class AuthTokenResponse(BaseModel):
    token: str = Field(..., description="JWT access token.")
    token_type: str = Field("bearer", description="Token type for Authorization header.")


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User id.")
    username: str = Field(..., description="Username.")
    role: Role = Field(..., description="artist or team.")
    is_team_member: bool = Field(..., description="True when role is team.")


# Submission drafts (intake)


class AudioFileIn(DraftModel):
    url: str = Field(..., min_length=1, description="Url returned by POST /upload/audio.")
    title: str = Field("", description="Original file title; defaults to the track title.")
    track_number: Optional[int] = Field(None, description="Ignored; recomputed from track order.")


class TrackIn(DraftModel):
    title: str = Field(..., min_length=1, description="Track title.")
    version: Optional[str] = Field(None, description="Version, e.g. 'Radio Edit'.")
    featured_artist: Optional[str] = Field(None, description="Featured artist on this track.")
    isrc: Optional[str] = Field(None, description="ISRC if already assigned.")
    upc: Optional[str] = Field(None, description="UPC if already assigned.")
    audio_file: AudioFileIn


class ArtworkIn(DraftModel):
    url: str = Field(..., min_length=1, description="Url returned by POST /upload/artwork.")
    name: str = Field("", description="Display name of the artwork file.")


class ArtistProfilesIn(DraftModel):
    spotify: Optional[str] = None
    apple_music: Optional[str] = None
    youtube: Optional[str] = None


class StreamingLinksIn(DraftModel):
    spotify: Optional[str] = None
    # The submission form posts appleMusicUrl / youtubeMusicUrl.
    apple_music: Optional[str] = Field(
        None, validation_alias=AliasChoices("appleMusic", "appleMusicUrl", "apple_music")
    )
    youtube_music: Optional[str] = Field(
        None, validation_alias=AliasChoices("youtubeMusic", "youtubeMusicUrl", "youtube_music")
    )


class SubmissionCreateRequest(DraftModel):
    artist_name: str = Field(..., min_length=1, description="Artist name.")
    email: EmailStr = Field(..., description="Contact email.")
    genre: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)
    release_type: ReleaseType = Field(..., description="single, EP or album.")
    release_title: str = Field(..., min_length=1)
    release_date: str = Field(..., min_length=1, description="Planned release date.")
    writer_composer: str = Field(..., min_length=1, description="Writer(s)/composer(s).")
    tracks: List[TrackIn] = Field(..., min_length=1, max_length=20, description="1-20 tracks.")
    artwork: Optional[ArtworkIn] = Field(None, description="Optional cover artwork.")
    version: Optional[str] = None
    production_name: Optional[str] = None
    featured_artist: Optional[str] = None
    featured_artist_type: Optional[Literal["new", "existing"]] = None
    featured_artist_profiles: Optional[ArtistProfilesIn] = None
    streaming_links: Optional[StreamingLinksIn] = None
    enable_youtube_content_id: bool = False
    previously_released: bool = False
    previous_upc: Optional[str] = None
    previous_isrc: Optional[str] = None


# Submission responses (review)


class AudioFileResponse(CamelModel):
    url: str
    title: str
    track_number: int


class TrackResponse(CamelModel):
    id: str = Field(..., description="Stable attachment id.")
    title: str
    version: Optional[str] = None
    featured_artist: Optional[str] = None
    isrc: Optional[str] = None
    upc: Optional[str] = None
    audio_file: AudioFileResponse


class ArtworkResponse(CamelModel):
    url: str
    name: str


class ArtistProfilesResponse(CamelModel):
    spotify: Optional[str] = None
    apple_music: Optional[str] = None
    youtube: Optional[str] = None


class StreamingLinksResponse(CamelModel):
    spotify: Optional[str] = None
    apple_music: Optional[str] = None
    youtube_music: Optional[str] = None


class SubmissionResponse(CamelModel):
    id: int = Field(..., description="Submission id.")
    status: SubmissionStatus = Field(..., description="pending, approved or declined.")
    created_at: datetime = Field(..., description="Creation timestamp.")
    artist_name: str
    email: str
    genre: str
    language: str
    release_type: ReleaseType
    release_title: str
    release_date: str
    writer_composer: str
    tracks: List[TrackResponse]
    artwork: Optional[ArtworkResponse] = None
    version: Optional[str] = None
    production_name: Optional[str] = None
    featured_artist: Optional[str] = None
    featured_artist_type: Optional[str] = None
    featured_artist_profiles: Optional[ArtistProfilesResponse] = None
    streaming_links: Optional[StreamingLinksResponse] = None
    enable_youtube_content_id: bool = False
    previously_released: bool = False
    previous_upc: Optional[str] = None
    previous_isrc: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    status: str = Field(..., description="approved or declined.")


class DownloadUrlResponse(CamelModel):
    download_url: str = Field(..., description="Url the file can be fetched from.")


class UploadResponse(BaseModel):
    url: str = Field(..., description="Placeholder url to embed in the submission draft.")


# FAQs


class FaqCreateRequest(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    position: Optional[int] = Field(None, description="Sort key; defaults to last.")


class FaqUpdateRequest(BaseModel):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    position: Optional[int] = None


class FaqResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question: str
    answer: str
    position: int
