"""
Submission store: the single source of truth for submissions.

The store is an explicitly constructed object owned by the application factory.
All operations run under one injected lock, and every mutation builds a new
record before swapping it into the map, so a failed operation leaves no partial
change behind.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, ContextManager, Dict, Generator, List, Optional

from prism_portal.errors import InvalidStateTransition, InvalidStatus, NotFound, OutOfRange
from prism_portal.models import (
    TERMINAL_STATUSES,
    Submission,
    SubmissionDraft,
    SubmissionStatus,
    Track,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _renumbered(tracks: List[Track]) -> List[Track]:
    return [
        dataclasses.replace(t, audio_file=dataclasses.replace(t.audio_file, track_number=i + 1))
        for i, t in enumerate(tracks)
    ]


class SubmissionStore:
    """In-memory submission map guarded by a lock."""

    def __init__(self, lock: Optional[ContextManager[Any]] = None, clock: Optional[Clock] = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._clock = clock or _utcnow
        self._submissions: Dict[int, Submission] = {}
        self._next_id = 1

    @contextmanager
    def _locked(self) -> Generator[Dict[int, Submission], None, None]:
        with self._lock:
            yield self._submissions

    def _require(self, submissions: Dict[int, Submission], submission_id: int) -> Submission:
        submission = submissions.get(submission_id)
        if submission is None:
            raise NotFound(f"Submission {submission_id} not found.")
        return submission

    # PUBLIC_INTERFACE
    def create(self, draft: SubmissionDraft) -> Submission:
        """
        Persist a validated draft as a new pending submission.

        Business rules are validated upstream; the store only assigns the id,
        the initial status and the creation timestamp.
        """
        with self._locked() as submissions:
            submission_id = self._next_id
            fields = {f.name: copy.deepcopy(getattr(draft, f.name)) for f in dataclasses.fields(SubmissionDraft)}
            submission = Submission(
                **fields,
                id=submission_id,
                status=SubmissionStatus.PENDING,
                created_at=self._clock(),
            )
            submissions[submission_id] = submission
            self._next_id += 1

        logger.info("submission_created: id=%s tracks=%s", submission_id, len(submission.tracks))
        return copy.deepcopy(submission)

    # PUBLIC_INTERFACE
    def list(self) -> List[Submission]:
        """Return every submission. Ordering is left to the review workflow."""
        with self._locked() as submissions:
            return [copy.deepcopy(s) for s in submissions.values()]

    # PUBLIC_INTERFACE
    def find(self, submission_id: int) -> Optional[Submission]:
        with self._locked() as submissions:
            submission = submissions.get(submission_id)
            return copy.deepcopy(submission) if submission is not None else None

    # PUBLIC_INTERFACE
    def get(self, submission_id: int) -> Submission:
        """Return the submission or raise NotFound."""
        with self._locked() as submissions:
            return copy.deepcopy(self._require(submissions, submission_id))

    # PUBLIC_INTERFACE
    def set_status(self, submission_id: int, new_status: str) -> Submission:
        """
        Move a submission to `approved` or `declined`.

        Re-applying the status a submission already holds is a no-op. Leaving a
        terminal status for the other terminal status is rejected.

        Raises:
            InvalidStatus: new_status is not a terminal review status.
            NotFound: unknown submission id.
            InvalidStateTransition: the submission was already decided otherwise.
        """
        try:
            target = SubmissionStatus(new_status)
        except ValueError:
            raise InvalidStatus(f"Invalid status {new_status!r}; expected 'approved' or 'declined'.")
        if target not in TERMINAL_STATUSES:
            raise InvalidStatus(f"Invalid status {new_status!r}; expected 'approved' or 'declined'.")

        with self._locked() as submissions:
            current = self._require(submissions, submission_id)
            if current.status is target:
                return copy.deepcopy(current)
            if current.status is not SubmissionStatus.PENDING:
                logger.warning(
                    "submission_transition_rejected: id=%s from=%s to=%s",
                    submission_id,
                    current.status.value,
                    target.value,
                )
                raise InvalidStateTransition(
                    f"Submission {submission_id} is already {current.status.value}."
                )
            updated = dataclasses.replace(current, status=target)
            submissions[submission_id] = updated

        logger.info("submission_status_changed: id=%s status=%s", submission_id, target.value)
        return copy.deepcopy(updated)

    # PUBLIC_INTERFACE
    def delete_artwork(self, submission_id: int) -> Submission:
        """Remove the artwork attachment. Deleting absent artwork is not an error."""
        with self._locked() as submissions:
            current = self._require(submissions, submission_id)
            had_artwork = current.artwork is not None
            updated = dataclasses.replace(current, artwork=None)
            submissions[submission_id] = updated

        if had_artwork:
            logger.info("artwork_deleted: submission_id=%s", submission_id)
        return copy.deepcopy(updated)

    # PUBLIC_INTERFACE
    def delete_track(self, submission_id: int, index: int) -> Submission:
        """
        Remove the track at `index`; later tracks shift down by one.

        Raises:
            NotFound: unknown submission id.
            OutOfRange: index outside the current track list.
        """
        with self._locked() as submissions:
            current = self._require(submissions, submission_id)
            if index < 0 or index >= len(current.tracks):
                raise OutOfRange(
                    f"Track index {index} out of range for submission {submission_id} "
                    f"({len(current.tracks)} tracks)."
                )
            updated = self._remove_track(submissions, current, index)
        return copy.deepcopy(updated)

    # PUBLIC_INTERFACE
    def delete_track_by_id(self, submission_id: int, track_id: str) -> Submission:
        """Remove a track by its stable attachment id."""
        with self._locked() as submissions:
            current = self._require(submissions, submission_id)
            index = next((i for i, t in enumerate(current.tracks) if t.id == track_id), None)
            if index is None:
                raise NotFound(f"Track {track_id} not found on submission {submission_id}.")
            updated = self._remove_track(submissions, current, index)
        return copy.deepcopy(updated)

    def _remove_track(self, submissions: Dict[int, Submission], current: Submission, index: int) -> Submission:
        # Caller holds the lock and has bounds-checked index.
        removed = current.tracks[index]
        remaining = current.tracks[:index] + current.tracks[index + 1 :]
        updated = dataclasses.replace(current, tracks=_renumbered(remaining))
        submissions[current.id] = updated
        logger.info("track_deleted: submission_id=%s index=%s track_id=%s", current.id, index, removed.id)
        return updated
