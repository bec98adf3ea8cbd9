"""Roundtable routes: submit, stop, auto-continue, reset and polling."""

from typing import List

import schemas
from config import pick_random_topic
from dependencies import get_credential_store, get_event_log, get_orchestrator
from fastapi import APIRouter, Depends, HTTPException, Query
from infrastructure import CredentialStore
from orchestration import EventLogSink, RoundtableOrchestrator

router = APIRouter()


def _status(orchestrator: RoundtableOrchestrator, credentials: CredentialStore) -> schemas.RoundtableStatus:
    return schemas.RoundtableStatus(
        generating=orchestrator.is_generating,
        cancel_requested=orchestrator.cancel_requested,
        auto_continue=orchestrator.auto_continue,
        history_length=len(orchestrator.session.history),
        remote_enabled=credentials.is_configured,
        participants=list(orchestrator.registry.ids()),
    )


@router.post("/messages", response_model=schemas.SubmitResult)
async def submit_message(
    message: schemas.MessageSubmit, orchestrator: RoundtableOrchestrator = Depends(get_orchestrator)
):
    """Address the roundtable. Rejected (accepted=false) while generating or when blank."""
    return schemas.SubmitResult(accepted=orchestrator.start_user_message(message.content))


@router.post("/random-topic", response_model=schemas.SubmitResult)
async def submit_random_topic(orchestrator: RoundtableOrchestrator = Depends(get_orchestrator)):
    """Start a discussion on one of the canned debate topics."""
    if orchestrator.is_generating:
        return schemas.SubmitResult(accepted=False)
    topic = pick_random_topic()
    if topic is None:
        raise HTTPException(status_code=404, detail="No topics configured")
    return schemas.SubmitResult(accepted=orchestrator.start_user_message(topic), topic=topic)


@router.post("/stop", response_model=schemas.StopResult)
async def stop(orchestrator: RoundtableOrchestrator = Depends(get_orchestrator)):
    """Stop the running discussion before the next participant speaks."""
    return schemas.StopResult(stopped=orchestrator.request_stop())


@router.put("/auto-continue", response_model=schemas.RoundtableStatus)
async def set_auto_continue(
    update: schemas.AutoContinueUpdate,
    orchestrator: RoundtableOrchestrator = Depends(get_orchestrator),
    credentials: CredentialStore = Depends(get_credential_store),
):
    orchestrator.set_auto_continue(update.enabled)
    return _status(orchestrator, credentials)


@router.post("/reset", response_model=schemas.RoundtableStatus)
async def reset(
    orchestrator: RoundtableOrchestrator = Depends(get_orchestrator),
    credentials: CredentialStore = Depends(get_credential_store),
):
    """Clear the table and start over."""
    if not orchestrator.reset():
        raise HTTPException(status_code=409, detail="Cannot reset while the roundtable is generating")
    return _status(orchestrator, credentials)


@router.get("/status", response_model=schemas.RoundtableStatus)
async def get_status(
    orchestrator: RoundtableOrchestrator = Depends(get_orchestrator),
    credentials: CredentialStore = Depends(get_credential_store),
):
    return _status(orchestrator, credentials)


@router.get("/history", response_model=List[schemas.TurnOut])
async def get_history(orchestrator: RoundtableOrchestrator = Depends(get_orchestrator)):
    return [schemas.TurnOut.model_validate(turn) for turn in orchestrator.history_snapshot()]


@router.get("/participants", response_model=List[schemas.ParticipantOut])
async def get_participants(orchestrator: RoundtableOrchestrator = Depends(get_orchestrator)):
    return [
        schemas.ParticipantOut(id=p.id, display_name=p.display_name, backend_model_ref=p.backend_model_ref)
        for p in orchestrator.registry.list()
    ]


@router.get("/events", response_model=schemas.EventPage)
async def poll_events(after: int = Query(0, ge=0), event_log: EventLogSink = Depends(get_event_log)):
    """Return events newer than `after`. Clients poll this every second or two."""
    events = [schemas.EventOut(**event.to_dict()) for event in event_log.events_after(after)]
    return schemas.EventPage(events=events, last_seq=event_log.last_seq)
