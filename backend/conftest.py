"""
Pytest configuration and shared fixtures for backend tests.

This module provides fixtures for the participant registry, scripted
providers, a recording presentation sink, an in-memory settings database
and an HTTP client wired to a test application.
"""

import asyncio
import sys
from pathlib import Path
from typing import AsyncGenerator, Dict, List, Sequence, Tuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from database import Base, create_engine_for, create_session_maker
from domain import Participant, Turn
from exceptions import ProviderError
from infrastructure import CredentialStore
from orchestration import (
    EventLogSink,
    PacingPolicy,
    ParticipantRegistry,
    PresentationSink,
    RoundtableOrchestrator,
)
from providers import ResponseProvider


class RecordingSink(PresentationSink):
    """Collects every event as a tuple for assertions."""

    def __init__(self):
        self.events: List[Tuple] = []

    def of_type(self, name: str) -> List[Tuple]:
        return [event for event in self.events if event[0] == name]

    def on_typing_start(self, participant_id):
        self.events.append(("typing_start", participant_id))

    def on_typing_stop(self, participant_id):
        self.events.append(("typing_stop", participant_id))

    def on_user_message_appended(self, content):
        self.events.append(("user_message", content))

    def on_message_delivered(self, participant_id, text):
        self.events.append(("delivered", participant_id, text))

    def on_error(self, participant_id, message):
        self.events.append(("error", participant_id, message))

    def on_cleared(self):
        self.events.append(("cleared",))

    def on_system_notice(self, text):
        self.events.append(("notice", text))

    def on_generation_started(self, can_stop):
        self.events.append(("generation_started", can_stop))

    def on_generation_finished(self):
        self.events.append(("generation_finished",))

    def on_stop_available(self, visible):
        self.events.append(("stop_available", visible))


class ScriptedProvider(ResponseProvider):
    """
    Replies "<id> reply #<n>" unless a reply or failure is scripted for an id.

    Every call is recorded together with the history snapshot it received.
    """

    def __init__(self, replies: Dict[str, str] = None, failures: Dict[str, Exception] = None):
        self.replies = dict(replies or {})
        self.failures = dict(failures or {})
        self.calls: List[Tuple[str, Tuple[Turn, ...]]] = []
        self.on_call = None

    async def generate(self, participant_id: str, history: Sequence[Turn]) -> str:
        self.calls.append((participant_id, tuple(history)))
        if self.on_call is not None:
            self.on_call(participant_id, len(self.calls))
        if participant_id in self.failures:
            raise self.failures[participant_id]
        if participant_id in self.replies:
            return self.replies[participant_id]
        return f"{participant_id} reply #{len(self.calls)}"

    def called_ids(self) -> List[str]:
        return [participant_id for participant_id, _ in self.calls]


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays without waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def participants() -> List[Participant]:
    return [
        Participant(id="a", display_name="Alpha", backend_model_ref="vendor/alpha"),
        Participant(id="b", display_name="Bravo", backend_model_ref="vendor/bravo"),
        Participant(id="c", display_name="Charlie", backend_model_ref="vendor/charlie"),
    ]


@pytest.fixture
def registry(participants) -> ParticipantRegistry:
    return ParticipantRegistry(participants)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def scripted_provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def orchestrator(registry, scripted_provider, recording_sink, sleep_recorder) -> RoundtableOrchestrator:
    """Orchestrator with the default pacing policy and a non-waiting sleep."""
    return RoundtableOrchestrator(
        registry=registry,
        provider=scripted_provider,
        sink=recording_sink,
        pacing=PacingPolicy(),
        sleep=sleep_recorder,
    )


@pytest.fixture
def provider_error() -> ProviderError:
    return ProviderError("API returned 500", status_code=500)


@pytest.fixture
async def session_maker():
    """In-memory SQLite database shared across connections."""
    import models  # noqa: F401  (registers tables)

    engine = create_engine_for("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield create_session_maker(engine)
    finally:
        await engine.dispose()


@pytest.fixture
async def credential_store(session_maker) -> CredentialStore:
    store = CredentialStore(session_maker)
    await store.load()
    return store


@pytest.fixture
async def client(registry, credential_store) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for a test application.

    ASGITransport does not run the lifespan, so components are attached to
    app.state directly. The remote side is scripted and pacing is disabled.
    """
    from core.app_factory import RoundtableComponents, attach_components, create_app
    from providers import CredentialRoutedProvider, MockResponseProvider

    app = create_app()
    event_log = EventLogSink()
    provider = CredentialRoutedProvider(
        mock=MockResponseProvider(), remote=ScriptedProvider(), credential=lambda: credential_store.api_key
    )
    orchestrator = RoundtableOrchestrator(
        registry=registry, provider=provider, sink=event_log, pacing=PacingPolicy.immediate()
    )
    attach_components(
        app,
        RoundtableComponents(
            orchestrator=orchestrator, event_log=event_log, provider=provider, credential_store=credential_store
        ),
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await orchestrator.shutdown(timeout=1.0)


@pytest.fixture
def roundtable_yaml(tmp_path, monkeypatch):
    """Point ROUNDTABLE_CONFIG_FILE at a temporary YAML file; returns a writer."""
    from config import clear_cache
    from core import reset_settings

    config_file = tmp_path / "roundtable.yaml"
    monkeypatch.setenv("ROUNDTABLE_CONFIG_FILE", str(config_file))
    reset_settings()
    clear_cache()

    def write(text: str) -> Path:
        config_file.write_text(text, encoding="utf-8")
        clear_cache()
        return config_file

    yield write

    reset_settings()
    clear_cache()


@pytest.fixture
def wait_until_idle(client):
    """Returns a coroutine that polls /roundtable/status until the sweep chain has finished."""
    async def wait(attempts: int = 200) -> dict:
        for _ in range(attempts):
            status = (await client.get("/roundtable/status")).json()
            if not status["generating"]:
                return status
            await asyncio.sleep(0.01)
        raise AssertionError("roundtable never became idle")

    return wait
