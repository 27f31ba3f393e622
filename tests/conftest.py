"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from nutrimind.config import Settings
from nutrimind.containers import AppContainer
from nutrimind.domain.extraction import ExtractionReply
from nutrimind.domain.logs import LogKind, Macros, NutritionEntry, WeightSample
from nutrimind.domain.nutrients import zero_micros
from nutrimind.domain.profile import Session, UserProfile, UserRecord
from nutrimind.services.extraction import ExtractionClient, ExtractionService
from nutrimind.services.logs import LogRepository, LogService
from nutrimind.services.profiles import ProfileRepository, ProfileService
from nutrimind.services.sessions import (
    SessionRepository,
    SessionService,
    UserRepository,
)
from nutrimind.services.stats import StatsService
from nutrimind.services.weights import WeightRepository, WeightService

EGG_AND_RUN_REPLY = """Here is the breakdown:

```json
[
  {
    "kind": "FOOD",
    "name": "2 large eggs",
    "calories": 143,
    "macros": {"protein": 12.6, "carbs": 0.7, "fat": 9.5},
    "micros": {"sodium": 142, "vitamin_b12": 0.9, "selenium": 30.7},
    "confidence_score": 0.9
  },
  {
    "kind": "EXERCISE",
    "name": "30 minute run",
    "calories": 300,
    "macros": {"protein": 0, "carbs": 0, "fat": 0},
    "micros": {},
    "confidence_score": 0.7
  }
]
```"""


@dataclass
class InMemoryLogRepository(LogRepository):
    """In-memory log repository for tests."""

    entries: dict[UUID, NutritionEntry] = field(default_factory=dict)
    writes: list[UUID] = field(default_factory=list)

    def list_logs(self, user_id: UUID) -> list[NutritionEntry]:
        return [entry for entry in self.entries.values() if entry.user_id == user_id]

    def put_log(self, entry: NutritionEntry) -> None:
        self.writes.append(entry.id)
        self.entries[entry.id] = entry

    def delete_log(self, user_id: UUID, entry_id: UUID) -> None:
        entry = self.entries.get(entry_id)
        if entry and entry.user_id == user_id:
            del self.entries[entry_id]


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository for tests."""

    samples: dict[UUID, WeightSample] = field(default_factory=dict)

    def list_samples(self, user_id: UUID) -> list[WeightSample]:
        return [s for s in self.samples.values() if s.user_id == user_id]

    def put_sample(self, sample: WeightSample) -> None:
        self.samples[sample.id] = sample

    def delete_sample(self, user_id: UUID, sample_id: UUID) -> None:
        sample = self.samples.get(sample_id)
        if sample and sample.user_id == user_id:
            del self.samples[sample_id]


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def put_profile(self, profile: UserProfile) -> None:
        self.profiles[profile.user_id] = profile


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_by_email(self, email: str) -> UserRecord | None:
        return self.users.get(email)

    def create_user(self, email: str) -> UserRecord:
        user = UserRecord(id=uuid4(), email=email)
        self.users[email] = user
        return user


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[UUID, Session] = field(default_factory=dict)

    def create_session(self, user_id: UUID, email: str) -> Session:
        session = Session(id=uuid4(), user_id=user_id, email=email)
        self.sessions[session.id] = session
        return session

    def get_session(self, session_id: UUID) -> Session | None:
        return self.sessions.get(session_id)

    def delete_session(self, session_id: UUID) -> None:
        self.sessions.pop(session_id, None)


@dataclass
class FakeExtractionClient(ExtractionClient):
    """Fake extraction client returning a fixed reply."""

    reply: ExtractionReply = field(
        default_factory=lambda: ExtractionReply(
            text=EGG_AND_RUN_REPLY,
            citation_urls=["https://example.com/eggs"],
        )
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        text: str,
        web_search: bool,
    ) -> ExtractionReply:
        self.calls.append(
            {"model": model, "text": text, "web_search": web_search}
        )
        if self.error is not None:
            raise self.error
        return self.reply

    def respond_with(self, payload: object, fenced: bool = True) -> None:
        """Reply with ``payload`` serialised as JSON."""
        body = json.dumps(payload)
        text = f"```json\n{body}\n```" if fenced else body
        self.reply = ExtractionReply(text=text, citation_urls=[])


def make_entry(  # noqa: PLR0913
    user_id: UUID,
    day: date,
    calories: float,
    kind: LogKind = LogKind.FOOD,
    macros: Macros | None = None,
    micros: dict[str, float] | None = None,
) -> NutritionEntry:
    """Build a stored entry with zeroed micronutrients unless given."""
    all_micros = zero_micros()
    all_micros.update(micros or {})
    return NutritionEntry(
        id=uuid4(),
        user_id=user_id,
        day=day,
        created_at=datetime(day.year, day.month, day.day, 12, tzinfo=UTC),
        kind=kind,
        description=f"{kind.value.lower()} item",
        calories=calories,
        macros=macros or Macros(),
        micros=all_micros,
    )


def build_extraction_service(client: ExtractionClient) -> ExtractionService:
    return ExtractionService(
        client=client, model="gpt-5.2", reasoning_effort="low", store=False
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def extraction_client() -> FakeExtractionClient:
    return FakeExtractionClient()


@pytest.fixture
def log_repository() -> InMemoryLogRepository:
    return InMemoryLogRepository()


@pytest.fixture
def container(
    settings: Settings,
    extraction_client: FakeExtractionClient,
    log_repository: InMemoryLogRepository,
) -> AppContainer:
    extraction_service = build_extraction_service(extraction_client)
    profile_service = ProfileService(InMemoryProfileRepository())

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        extraction_service=extraction_service,
        log_service=LogService(
            extraction_service=extraction_service, repository=log_repository
        ),
        stats_service=StatsService(log_repository),
        weight_service=WeightService(InMemoryWeightRepository()),
        profile_service=profile_service,
        session_service=SessionService(
            user_repository=InMemoryUserRepository(),
            session_repository=InMemorySessionRepository(),
            profile_service=profile_service,
        ),
        close_resources=close_resources,
    )
