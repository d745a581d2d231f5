"""
In-memory records held by the portal stores.

Records are plain dataclasses; the stores hand out copies so callers can
never mutate stored state behind the store's lock.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


class SubmissionStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


TERMINAL_STATUSES = frozenset({SubmissionStatus.APPROVED, SubmissionStatus.DECLINED})


class ReleaseType(str, enum.Enum):
    SINGLE = "single"
    EP = "EP"
    ALBUM = "album"


class Role(str, enum.Enum):
    ARTIST = "artist"
    TEAM = "team"


@dataclass
class User:
    """User account (username + password hash + role)."""

    id: int
    username: str
    password_hash: str
    role: Role = Role.ARTIST
    created_at: Optional[datetime] = None

    @property
    def is_team_member(self) -> bool:
        return self.role is Role.TEAM


@dataclass
class AudioFile:
    url: str
    title: str
    track_number: int


@dataclass
class Track:
    """One track attachment.

    `id` is stable for the track's lifetime; its position in the submission's
    track list is only a display order and shifts when earlier tracks go away.
    """

    id: str
    title: str
    audio_file: AudioFile
    version: Optional[str] = None
    featured_artist: Optional[str] = None
    isrc: Optional[str] = None
    upc: Optional[str] = None


@dataclass
class Artwork:
    url: str
    name: str


@dataclass
class ArtistProfiles:
    spotify: Optional[str] = None
    apple_music: Optional[str] = None
    youtube: Optional[str] = None


@dataclass
class StreamingLinks:
    spotify: Optional[str] = None
    apple_music: Optional[str] = None
    youtube_music: Optional[str] = None


@dataclass
class SubmissionDraft:
    """A fully validated submission, ready to be persisted by the store."""

    artist_name: str
    email: str
    genre: str
    language: str
    release_type: ReleaseType
    release_title: str
    release_date: str
    writer_composer: str
    tracks: List[Track]
    artwork: Optional[Artwork] = None
    version: Optional[str] = None
    production_name: Optional[str] = None
    featured_artist: Optional[str] = None
    featured_artist_type: Optional[str] = None
    featured_artist_profiles: Optional[ArtistProfiles] = None
    streaming_links: Optional[StreamingLinks] = None
    enable_youtube_content_id: bool = False
    previously_released: bool = False
    previous_upc: Optional[str] = None
    previous_isrc: Optional[str] = None


@dataclass
class Submission(SubmissionDraft):
    """Stored submission: a draft plus identity and workflow state."""

    id: int = 0
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: Optional[datetime] = None


@dataclass
class Faq:
    id: int
    question: str
    answer: str
    position: int = 0
