from __future__ import annotations

import threading

import pytest

from conftest import make_payload
from prism_portal.errors import InvalidStateTransition, InvalidStatus, NotFound, OutOfRange
from prism_portal.intake import IntakeWorkflow
from prism_portal.models import SubmissionDraft, SubmissionStatus
from prism_portal.schemas import SubmissionCreateRequest
from prism_portal.store import SubmissionStore


def _draft(store: SubmissionStore, **kwargs) -> SubmissionDraft:
    req = SubmissionCreateRequest.model_validate(make_payload(**kwargs))
    return IntakeWorkflow(store).build_draft(req)


def test_create_assigns_increasing_ids_and_pending_status(store: SubmissionStore) -> None:
    created = [store.create(_draft(store, artist_name=f"A{i}")) for i in range(3)]

    assert [s.id for s in created] == [1, 2, 3]
    assert all(s.status is SubmissionStatus.PENDING for s in created)
    assert all(s.created_at is not None for s in created)
    assert created[0].created_at < created[1].created_at


def test_returned_records_are_copies(store: SubmissionStore) -> None:
    submission = store.create(_draft(store))
    submission.tracks.clear()
    submission.artist_name = "Changed"

    stored = store.get(submission.id)
    assert len(stored.tracks) == 2
    assert stored.artist_name == "Nova"


def test_get_unknown_id_raises_not_found(store: SubmissionStore) -> None:
    with pytest.raises(NotFound):
        store.get(42)
    assert store.find(42) is None


def test_set_status_approved_and_declined(store: SubmissionStore) -> None:
    a = store.create(_draft(store))
    b = store.create(_draft(store))

    store.set_status(a.id, "approved")
    store.set_status(b.id, "declined")

    assert store.get(a.id).status is SubmissionStatus.APPROVED
    assert store.get(b.id).status is SubmissionStatus.DECLINED


def test_set_status_unknown_id(store: SubmissionStore) -> None:
    with pytest.raises(NotFound):
        store.set_status(99, "approved")


@pytest.mark.parametrize("value", ["pending", "archived", ""])
def test_set_status_rejects_non_terminal_values(store: SubmissionStore, value: str) -> None:
    submission = store.create(_draft(store))
    with pytest.raises(InvalidStatus):
        store.set_status(submission.id, value)
    assert store.get(submission.id).status is SubmissionStatus.PENDING


def test_terminal_state_is_final_but_reapplying_is_a_noop(store: SubmissionStore) -> None:
    submission = store.create(_draft(store))
    store.set_status(submission.id, "approved")

    assert store.set_status(submission.id, "approved").status is SubmissionStatus.APPROVED
    with pytest.raises(InvalidStateTransition):
        store.set_status(submission.id, "declined")
    assert store.get(submission.id).status is SubmissionStatus.APPROVED


def test_delete_track_shifts_later_tracks_and_renumbers(store: SubmissionStore) -> None:
    submission = store.create(_draft(store, tracks=3))
    ids = [t.id for t in submission.tracks]

    updated = store.delete_track(submission.id, 0)

    assert [t.id for t in updated.tracks] == ids[1:]
    assert [t.title for t in updated.tracks] == ["Track 2", "Track 3"]
    assert [t.audio_file.track_number for t in updated.tracks] == [1, 2]


def test_delete_track_out_of_range_leaves_submission_unchanged(store: SubmissionStore) -> None:
    submission = store.create(_draft(store, tracks=3))

    with pytest.raises(OutOfRange):
        store.delete_track(submission.id, 5)
    with pytest.raises(OutOfRange):
        store.delete_track(submission.id, 3)
    with pytest.raises(OutOfRange):
        store.delete_track(submission.id, -1)

    assert store.get(submission.id) == submission


def test_delete_track_by_id(store: SubmissionStore) -> None:
    submission = store.create(_draft(store, tracks=3))
    middle = submission.tracks[1].id

    updated = store.delete_track_by_id(submission.id, middle)
    assert middle not in [t.id for t in updated.tracks]
    assert len(updated.tracks) == 2

    with pytest.raises(NotFound):
        store.delete_track_by_id(submission.id, middle)


def test_delete_artwork_is_idempotent(store: SubmissionStore) -> None:
    submission = store.create(_draft(store))
    assert submission.artwork is not None

    store.delete_artwork(submission.id)
    store.delete_artwork(submission.id)

    assert store.get(submission.id).artwork is None
    with pytest.raises(NotFound):
        store.delete_artwork(123)


def _race(workers: int, target) -> None:
    barrier = threading.Barrier(workers)

    def run(i: int) -> None:
        barrier.wait()
        target(i)

    threads = [threading.Thread(target=run, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_concurrent_decisions_settle_on_one_status(store: SubmissionStore) -> None:
    submission = store.create(_draft(store))
    outcomes = {}

    def decide(i: int) -> None:
        wanted = "approved" if i % 2 == 0 else "declined"
        try:
            outcomes[i] = (wanted, store.set_status(submission.id, wanted).status.value)
        except InvalidStateTransition:
            outcomes[i] = (wanted, None)

    _race(20, decide)

    final = store.get(submission.id).status.value
    assert final in ("approved", "declined")
    assert len(outcomes) == 20
    for wanted, result in outcomes.values():
        if wanted == final:
            assert result == final
        else:
            assert result is None


def test_concurrent_creates_get_unique_contiguous_ids(store: SubmissionStore) -> None:
    draft = _draft(store)
    ids = []
    ids_lock = threading.Lock()

    def create(_: int) -> None:
        created = store.create(draft)
        with ids_lock:
            ids.append(created.id)

    _race(25, create)

    assert sorted(ids) == list(range(1, 26))
    assert len(store.list()) == 25
