from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from prism_portal.main import create_app
from prism_portal.store import SubmissionStore

TEAM_USERNAME = "leo"
TEAM_PASSWORD = "team-secret-pw"


class StepClock:
    """Deterministic clock: each call is one minute after the previous one."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


def make_payload(artist_name: str = "Nova", release_title: str = "First Light", tracks: int = 2, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "artistName": artist_name,
        "email": "nova@example.com",
        "genre": "Electronic",
        "language": "English",
        "releaseType": "EP" if tracks > 1 else "single",
        "releaseTitle": release_title,
        "releaseDate": "2024-06-01",
        "writerComposer": "Nova",
        "artwork": {"url": "https://example.com/artwork/cover.jpg", "name": "cover.jpg"},
        "tracks": [
            {
                "title": f"Track {i + 1}",
                "audioFile": {"url": f"https://example.com/audio/t{i + 1}.mp3", "title": f"t{i + 1}.mp3"},
            }
            for i in range(tracks)
        ],
    }
    payload.update(extra)
    return payload


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("TEAM_USERNAME", TEAM_USERNAME)
    monkeypatch.setenv("TEAM_PASSWORD", TEAM_PASSWORD)
    monkeypatch.setenv("MEDIA_BASE_URL", "https://media.test")


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store(clock: StepClock) -> SubmissionStore:
    return SubmissionStore(clock=clock)


@pytest.fixture
def client(store: SubmissionStore) -> Iterator[TestClient]:
    with TestClient(create_app(submissions=store)) as c:
        yield c


@pytest.fixture
def team_headers(client: TestClient) -> Dict[str, str]:
    res = client.post("/auth/login", json={"username": TEAM_USERNAME, "password": TEAM_PASSWORD})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def artist_headers(client: TestClient) -> Dict[str, str]:
    res = client.post("/auth/register", json={"username": "someartist", "password": "artist-pw"})
    assert res.status_code == 201
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def submit(client: TestClient) -> Callable[..., Dict[str, Any]]:
    def _submit(**kwargs: Any) -> Dict[str, Any]:
        res = client.post("/submissions", json=make_payload(**kwargs))
        assert res.status_code == 201, res.text
        return res.json()

    return _submit
