from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageSubmit(BaseModel):
    content: str = Field(..., max_length=10_000)


class SubmitResult(BaseModel):
    accepted: bool
    topic: Optional[str] = None


class AutoContinueUpdate(BaseModel):
    enabled: bool


class StopResult(BaseModel):
    stopped: bool


class TurnOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    speaker: str
    content: str
    timestamp: datetime


class ParticipantOut(BaseModel):
    id: str
    display_name: str
    backend_model_ref: str


class RoundtableStatus(BaseModel):
    generating: bool
    cancel_requested: bool
    auto_continue: bool
    history_length: int
    remote_enabled: bool
    participants: List[str]


class EventOut(BaseModel):
    seq: int
    type: str
    participant_id: Optional[str] = None
    text: Optional[str] = None
    visible: Optional[bool] = None
    timestamp: datetime


class EventPage(BaseModel):
    events: List[EventOut]
    last_seq: int


class CredentialUpdate(BaseModel):
    api_key: str = ""


class CredentialStatus(BaseModel):
    configured: bool
