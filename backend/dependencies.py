"""Shared dependencies for FastAPI endpoints."""

from fastapi import Request
from infrastructure import CredentialStore
from orchestration import EventLogSink, RoundtableOrchestrator


def get_orchestrator(request: Request) -> RoundtableOrchestrator:
    """
    Dependency to get the roundtable orchestrator from app state.

    The instance is created during application startup in the lifespan context.
    """
    return request.app.state.orchestrator


def get_event_log(request: Request) -> EventLogSink:
    """Dependency to get the polled event buffer from app state."""
    return request.app.state.event_log


def get_credential_store(request: Request) -> CredentialStore:
    """Dependency to get the credential store from app state."""
    return request.app.state.credential_store
