import json

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.result_cache import ResultCache
from app.services.topic_query_service import TopicQueryService


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingLoader:
    """Snapshot loader that returns fixed records and counts calls."""

    def __init__(self, records):
        self.records = records
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.records


@pytest.fixture()
def topics():
    return [
        {"name": "Go", "id": 1},
        {"name": "Golang Basics", "id": 2},
        {"name": "Python", "id": 3},
    ]


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def cache(clock):
    return ResultCache(ttl_seconds=300, clock=clock)


@pytest.fixture()
def loader(topics):
    return CountingLoader(topics)


@pytest.fixture()
def service(cache, loader):
    return TopicQueryService(cache=cache, load_snapshot=loader)


@pytest.fixture()
def client(service):
    with TestClient(create_app(service)) as c:
        yield c


@pytest.fixture()
def topics_file(tmp_path, topics):
    path = tmp_path / "topics.json"
    path.write_text(json.dumps(topics), encoding="utf-8")
    return path
