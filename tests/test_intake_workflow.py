from __future__ import annotations

import pydantic
import pytest

from conftest import make_payload
from prism_portal.errors import ValidationError
from prism_portal.intake import IntakeWorkflow
from prism_portal.schemas import SubmissionCreateRequest
from prism_portal.store import SubmissionStore


def test_submit_normalizes_tracks(store: SubmissionStore) -> None:
    payload = make_payload(tracks=3)
    payload["tracks"][1]["audioFile"]["title"] = ""
    payload["tracks"][2]["audioFile"]["trackNumber"] = 99
    payload["productionName"] = "   "

    submission = IntakeWorkflow(store).submit(SubmissionCreateRequest.model_validate(payload))

    assert [t.audio_file.track_number for t in submission.tracks] == [1, 2, 3]
    assert submission.tracks[1].audio_file.title == "Track 2"
    assert len({t.id for t in submission.tracks}) == 3
    assert submission.production_name is None


def test_artwork_is_optional(store: SubmissionStore) -> None:
    payload = make_payload()
    del payload["artwork"]

    submission = IntakeWorkflow(store).submit(SubmissionCreateRequest.model_validate(payload))
    assert submission.artwork is None


@pytest.mark.parametrize(
    "field, value",
    [
        ("artistName", "   "),
        ("releaseTitle", ""),
        ("releaseType", "mixtape"),
        ("email", "not-an-email"),
        ("tracks", []),
    ],
)
def test_draft_schema_rejects_invalid_fields(field: str, value: object) -> None:
    payload = make_payload()
    payload[field] = value
    with pytest.raises(pydantic.ValidationError):
        SubmissionCreateRequest.model_validate(payload)


def test_draft_schema_rejects_track_without_audio_url() -> None:
    payload = make_payload()
    payload["tracks"][0]["audioFile"]["url"] = ""
    with pytest.raises(pydantic.ValidationError):
        SubmissionCreateRequest.model_validate(payload)


def test_draft_schema_caps_track_count() -> None:
    with pytest.raises(pydantic.ValidationError):
        SubmissionCreateRequest.model_validate(make_payload(tracks=21))


def test_issue_upload_url(store: SubmissionStore) -> None:
    intake = IntakeWorkflow(store)

    url = intake.issue_upload_url("audio", "my song (final).mp3", "audio/mpeg", 1024)
    assert url.startswith("https://media.test/audio/")
    assert url.endswith("_my_song_final_.mp3")

    art = intake.issue_upload_url("artwork", None, "image/png", 10)
    assert art.startswith("https://media.test/artwork/")
    assert art.endswith("_artwork.jpg")


@pytest.mark.parametrize(
    "kind, content_type, size",
    [
        ("audio", "image/png", 10),
        ("artwork", "audio/mpeg", 10),
        ("audio", "audio/mpeg", 0),
        ("video", "video/mp4", 10),
    ],
)
def test_issue_upload_url_rejects_bad_files(store: SubmissionStore, kind: str, content_type: str, size: int) -> None:
    with pytest.raises(ValidationError):
        IntakeWorkflow(store).issue_upload_url(kind, "f.bin", content_type, size)


def test_issue_upload_url_enforces_size_limit(store: SubmissionStore, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "100")
    with pytest.raises(ValidationError):
        IntakeWorkflow(store).issue_upload_url("audio", "big.mp3", "audio/mpeg", 101)


def test_streaming_links_accept_submission_form_keys(store: SubmissionStore) -> None:
    payload = make_payload(
        streamingLinks={
            "spotify": "https://open.spotify.com/artist/nova",
            "appleMusicUrl": "https://music.apple.com/artist/nova",
            "youtubeMusicUrl": "https://music.youtube.com/channel/nova",
        }
    )

    submission = IntakeWorkflow(store).submit(SubmissionCreateRequest.model_validate(payload))

    assert submission.streaming_links.apple_music == "https://music.apple.com/artist/nova"
    assert submission.streaming_links.youtube_music == "https://music.youtube.com/channel/nova"


def test_streaming_links_accept_camel_case_keys() -> None:
    payload = make_payload(streamingLinks={"appleMusic": "https://music.apple.com/a", "youtube_music": "https://y/a"})

    req = SubmissionCreateRequest.model_validate(payload)

    assert req.streaming_links.apple_music == "https://music.apple.com/a"
    assert req.streaming_links.youtube_music == "https://y/a"
