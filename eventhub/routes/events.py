# eventhub/routes/events.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.auth_token import Identity
from eventhub.database import get_db
from eventhub.deps.security import require_identity
from eventhub.deps.services import get_event_service
from eventhub.schemas import (
    EventCreate,
    EventEnvelope,
    EventRead,
    MessageResponse,
    PriorityUpdate,
)
from eventhub.services import EventService

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("", response_model=EventEnvelope)
async def create_event(
    payload: EventCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    events: EventService = Depends(get_event_service),
):
    event = await events.create(db, identity, payload)
    return EventEnvelope(event=EventRead.model_validate(event))


@router.get("", response_model=List[EventRead])
async def list_my_events(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    events: EventService = Depends(get_event_service),
):
    return [EventRead.model_validate(e) for e in await events.list_mine(db, identity)]


@router.put("/{event_id}/priority", response_model=EventEnvelope)
async def update_priority(
    event_id: int,
    payload: PriorityUpdate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    events: EventService = Depends(get_event_service),
):
    event = await events.update_priority(db, identity, event_id, payload.priority)
    return EventEnvelope(event=EventRead.model_validate(event))


@router.put("/{event_id}/complete", response_model=EventEnvelope)
async def mark_complete(
    event_id: int,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    events: EventService = Depends(get_event_service),
):
    event = await events.mark_complete(db, identity, event_id)
    return EventEnvelope(event=EventRead.model_validate(event))


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: int,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    events: EventService = Depends(get_event_service),
):
    return await events.delete(db, identity, event_id)
