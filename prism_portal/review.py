"""
Review workflow: the staff-facing surface over the submission store.

Filtering, sorting and pagination mirror the team console:
- status filter: all | pending | approved | declined
- search: case-insensitive substring over artist name OR release title
- sort: by creation date, or by the status string (alphabetical, so
  approved < declined < pending; this is not lifecycle order)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from prism_portal.errors import NotFound, OutOfRange, ValidationError
from prism_portal.models import Submission, SubmissionStatus
from prism_portal.store import SubmissionStore


STATUS_FILTERS = ("all", "pending", "approved", "declined")
SORT_KEYS = ("date", "status")
SORT_ORDERS = ("asc", "desc")


@dataclass
class ReviewPage:
    items: List[Submission]
    total: int
    total_pages: int


# PUBLIC_INTERFACE
def total_pages(count: int, page_size: int) -> int:
    """Number of pages needed to show `count` items."""
    return math.ceil(count / page_size) if page_size > 0 else 0


class ReviewWorkflow:
    """List, filter, sort, paginate and decide submissions."""

    def __init__(self, store: SubmissionStore, page_size: int = 10) -> None:
        self._store = store
        self.page_size = page_size

    # PUBLIC_INTERFACE
    def list_filtered(self, status_filter: str = "all", search: str = "") -> List[Submission]:
        if status_filter not in STATUS_FILTERS:
            raise ValidationError(f"Unknown status filter {status_filter!r}.")

        needle = (search or "").lower()
        result = []
        for submission in self._store.list():
            if status_filter != "all" and submission.status.value != status_filter:
                continue
            if needle and not (
                needle in submission.artist_name.lower()
                or needle in (submission.release_title or "").lower()
            ):
                continue
            result.append(submission)
        return result

    # PUBLIC_INTERFACE
    def sort(self, items: Sequence[Submission], key: str = "date", order: str = "desc") -> List[Submission]:
        if key not in SORT_KEYS:
            raise ValidationError(f"Unknown sort key {key!r}.")
        if order not in SORT_ORDERS:
            raise ValidationError(f"Unknown sort order {order!r}.")

        if key == "date":
            sort_key = lambda s: s.created_at.timestamp()  # noqa: E731
        else:
            sort_key = lambda s: s.status.value  # noqa: E731
        return sorted(items, key=sort_key, reverse=(order == "desc"))

    # PUBLIC_INTERFACE
    def paginate(self, items: Sequence[Submission], page: int, page_size: Optional[int] = None) -> List[Submission]:
        """Return the 1-indexed `page`; pages past the end are empty."""
        size = page_size if page_size is not None else self.page_size
        if page < 1:
            raise ValidationError("page must be >= 1.")
        if size < 1:
            raise ValidationError("page_size must be >= 1.")
        return list(items[(page - 1) * size : page * size])

    # PUBLIC_INTERFACE
    def query(
        self,
        *,
        status: str = "all",
        search: str = "",
        sort: str = "date",
        order: str = "desc",
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> ReviewPage:
        """Filter, sort and (when `page` is given) paginate in one call."""
        size = page_size if page_size is not None else self.page_size
        ordered = self.sort(self.list_filtered(status, search), sort, order)
        items = self.paginate(ordered, page, size) if page is not None else ordered
        return ReviewPage(items=items, total=len(ordered), total_pages=total_pages(len(ordered), size))

    # PUBLIC_INTERFACE
    def get(self, submission_id: int) -> Submission:
        return self._store.get(submission_id)

    # PUBLIC_INTERFACE
    def approve(self, submission_id: int) -> Submission:
        return self._store.set_status(submission_id, SubmissionStatus.APPROVED.value)

    # PUBLIC_INTERFACE
    def decline(self, submission_id: int) -> Submission:
        return self._store.set_status(submission_id, SubmissionStatus.DECLINED.value)

    # PUBLIC_INTERFACE
    def set_status(self, submission_id: int, status: str) -> Submission:
        return self._store.set_status(submission_id, status)

    # PUBLIC_INTERFACE
    def delete_artwork(self, submission_id: int) -> Submission:
        return self._store.delete_artwork(submission_id)

    # PUBLIC_INTERFACE
    def delete_track(self, submission_id: int, index: int) -> Submission:
        return self._store.delete_track(submission_id, index)

    # PUBLIC_INTERFACE
    def delete_track_by_id(self, submission_id: int, track_id: str) -> Submission:
        return self._store.delete_track_by_id(submission_id, track_id)

    # PUBLIC_INTERFACE
    def track_download_url(self, submission_id: int, index: int) -> str:
        """
        Return the download url of a track's audio file.

        The stored url is passed through as-is; there is no signing step because
        files are never stored by this service.
        """
        submission = self._store.get(submission_id)
        if index < 0 or index >= len(submission.tracks):
            raise OutOfRange(f"Track index {index} out of range for submission {submission_id}.")
        url = submission.tracks[index].audio_file.url
        # Drafts created directly on the store, not through intake, may carry a blank url.
        if not url:
            raise NotFound("Audio file missing.")
        return url

    # PUBLIC_INTERFACE
    def artwork_download_url(self, submission_id: int) -> str:
        submission = self._store.get(submission_id)
        if submission.artwork is None or not submission.artwork.url:
            raise NotFound("Artwork not found.")
        return submission.artwork.url
