"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

import pytest
from postgrest.exceptions import APIError

from nutrimind.adapters.supabase_log_repository import SupabaseLogRepository
from nutrimind.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutrimind.adapters.supabase_session_repository import SupabaseSessionRepository
from nutrimind.adapters.supabase_user_repository import SupabaseUserRepository
from nutrimind.adapters.supabase_weight_repository import SupabaseWeightRepository
from nutrimind.domain.logs import LogKind, WeightSample
from nutrimind.domain.profile import ActivityLevel, Gender, default_profile
from nutrimind.errors import PersistenceError
from tests.conftest import make_entry


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_options: dict[str, object] = field(default_factory=dict)
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    error: APIError | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload, **kwargs) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_options = kwargs
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_log_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutrition_logs")
    user_id = uuid4()
    entry = make_entry(user_id, date(2024, 4, 1), 320, micros={"iron": 2.5})
    repository = SupabaseLogRepository(client)

    repository.put_log(entry)
    payload = table.last_payload
    assert isinstance(payload, dict)
    assert payload["kind"] == "FOOD"
    assert payload["day"] == "2024-04-01"
    assert payload["micros"]["iron"] == 2.5

    table.queue("select", [{**payload, "source_urls": ["https://example.com"]}])
    fetched = repository.list_logs(user_id)

    assert fetched[0].id == entry.id
    assert fetched[0].kind is LogKind.FOOD
    assert fetched[0].micros == entry.micros
    assert fetched[0].source_urls == ["https://example.com"]
    assert ("user_id", str(user_id)) in table.last_filters


def test_log_repository_tolerates_sparse_rows() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    client.table("nutrition_logs").queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "day": "2024-04-02",
                "created_at": datetime(2024, 4, 2, tzinfo=UTC).isoformat(),
                "kind": "EXERCISE",
                "description": "swim",
                "calories": 410,
                "protein_g": None,
                "carbs_g": None,
                "fat_g": None,
                "micros": None,
                "source_urls": None,
            }
        ],
    )

    entry = SupabaseLogRepository(client).list_logs(user_id)[0]

    assert entry.kind is LogKind.EXERCISE
    assert entry.macros.protein_g == 0
    assert entry.micros["zinc"] == 0
    assert entry.source_urls == []


def test_log_repository_delete_filters_by_owner() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    entry_id = uuid4()

    SupabaseLogRepository(client).delete_log(user_id, entry_id)

    filters = client.table("nutrition_logs").last_filters
    assert filters == [("id", str(entry_id)), ("user_id", str(user_id))]


def test_log_repository_wraps_api_errors() -> None:
    client = FakeSupabaseClient()
    client.table("nutrition_logs").error = APIError(
        {"message": "relation does not exist", "code": "42P01"}
    )

    with pytest.raises(PersistenceError, match="relation does not exist"):
        SupabaseLogRepository(client).list_logs(uuid4())


def test_weight_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("weight_logs")
    user_id = uuid4()
    sample = WeightSample(
        id=uuid4(), user_id=user_id, day=date(2024, 4, 1), weight_kg=72.4
    )
    repository = SupabaseWeightRepository(client)

    repository.put_sample(sample)
    table.queue("select", [table.last_payload])  # type: ignore[list-item]

    assert repository.list_samples(user_id) == [sample]


def test_profile_repository_upserts_by_user() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    user_id = uuid4()
    profile = default_profile(user_id, email="ada@example.com")
    repository = SupabaseProfileRepository(client)

    assert repository.get_profile(user_id) is None

    repository.put_profile(profile)
    assert table.last_options == {"on_conflict": "user_id"}

    table.queue("select", [table.last_payload])  # type: ignore[list-item]
    fetched = repository.get_profile(user_id)

    assert fetched == profile
    assert fetched is not None
    assert fetched.gender is Gender.MALE
    assert fetched.activity_level is ActivityLevel.MODERATE


def test_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = str(uuid4())
    users_table.queue("insert", [{"id": user_id, "email": "ada@example.com"}])
    users_table.queue("select", [{"id": user_id, "email": "ada@example.com"}])

    repository = SupabaseUserRepository(client)
    created = repository.create_user("ada@example.com")
    fetched = repository.get_by_email("ada@example.com")

    assert str(created.id) == user_id
    assert fetched == created


def test_user_repository_raises_when_insert_returns_nothing() -> None:
    with pytest.raises(PersistenceError):
        SupabaseUserRepository(FakeSupabaseClient()).create_user("a@example.com")


def test_session_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("sessions")
    session_id = str(uuid4())
    user_id = str(uuid4())
    row = {"id": session_id, "user_id": user_id, "email": "ada@example.com"}
    table.queue("insert", [row])
    table.queue("select", [row])
    repository = SupabaseSessionRepository(client)

    created = repository.create_session(uuid4(), "ada@example.com")
    fetched = repository.get_session(created.id)
    repository.delete_session(created.id)

    assert fetched == created
    assert repository.get_session(created.id) is None
    assert table.last_filters[-2:] == [("id", session_id), ("id", session_id)]
