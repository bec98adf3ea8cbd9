"""
Application factory for creating FastAPI app instances.

This module provides functions for creating and configuring the FastAPI application
with all necessary middleware, routers, and dependencies.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from config import (
    get_mock_replies,
    get_participant_entries,
    get_persona_prompt_template,
    log_config_validation,
)
from fastapi import FastAPI
from infrastructure import CredentialStore
from orchestration import (
    CompositeSink,
    EventLogSink,
    LoggingSink,
    PacingPolicy,
    ParticipantRegistry,
    RoundtableOrchestrator,
    RoundtableSession,
)
from providers import CredentialRoutedProvider, MockResponseProvider, RemoteResponseProvider

from .logging_config import get_logger, setup_logging
from .settings import Settings, get_settings

logger = get_logger("AppFactory")


@dataclass
class RoundtableComponents:
    """Everything the lifespan wires together, kept on app.state."""

    orchestrator: RoundtableOrchestrator
    event_log: EventLogSink
    provider: CredentialRoutedProvider
    credential_store: CredentialStore


def build_roundtable(settings: Settings, credential_store: CredentialStore) -> RoundtableComponents:
    """
    Build registry, providers, sinks and the orchestrator from configuration.

    Raises:
        ConfigurationError: If the participant set in roundtable.yaml is invalid
    """
    registry = ParticipantRegistry.from_config(get_participant_entries())

    mock = MockResponseProvider(replies=get_mock_replies(), latency=settings.mock_latency_seconds)
    remote = RemoteResponseProvider(
        registry=registry,
        api_key=lambda: credential_store.api_key,
        endpoint=settings.openrouter_api_url,
        persona_prompt=get_persona_prompt_template(),
        max_tokens=settings.remote_max_tokens,
        timeout=settings.remote_timeout_seconds,
        app_title=settings.app_title,
        referer=settings.app_referer,
    )
    provider = CredentialRoutedProvider(mock=mock, remote=remote, credential=lambda: credential_store.api_key)

    event_log = EventLogSink(max_events=settings.event_buffer_size)
    orchestrator = RoundtableOrchestrator(
        registry=registry,
        provider=provider,
        sink=CompositeSink([event_log, LoggingSink()]),
        pacing=PacingPolicy.from_settings(settings),
        session=RoundtableSession(auto_continue=settings.auto_continue),
    )
    return RoundtableComponents(
        orchestrator=orchestrator, event_log=event_log, provider=provider, credential_store=credential_store
    )


def attach_components(app: FastAPI, components: RoundtableComponents) -> None:
    """Store components in app state for dependency injection."""
    app.state.orchestrator = components.orchestrator
    app.state.event_log = components.event_log
    app.state.provider = components.provider
    app.state.credential_store = components.credential_store


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    from database import async_session_maker, init_db
    from fastapi.middleware.cors import CORSMiddleware
    from routers import roundtable, settings as settings_router

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for application startup and shutdown."""
        setup_logging(settings.log_level)
        logger.info("🚀 Application startup...")

        log_config_validation()

        await init_db()
        credential_store = CredentialStore(async_session_maker, default=settings.openrouter_api_key)
        await credential_store.load()

        components = build_roundtable(settings, credential_store)
        attach_components(app, components)

        logger.info("✅ Application startup complete")

        yield

        logger.info("🛑 Application shutdown...")
        await components.orchestrator.shutdown()
        await components.provider.aclose()
        logger.info("✅ Application shutdown complete")

    app = FastAPI(title="Roundtable API", lifespan=lifespan)

    allowed_origins = settings.get_cors_origins()
    logger.info(f"🔒 CORS allowed origins: {allowed_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(roundtable.router, prefix="/roundtable", tags=["Roundtable"])
    app.include_router(settings_router.router, prefix="/settings", tags=["Settings"])

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
