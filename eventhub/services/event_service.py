"""Owner-scoped event operations.

Every statement filters on ``(Event.id, Event.created_by)``; updates and
deletes are single ``... RETURNING`` statements so a match and its mutation
happen atomically in the store.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.auth_token import Identity
from eventhub.errors import NotFoundError, ValidationError
from eventhub.models.event import Event, Priority
from eventhub.schemas import EventCreate, MessageResponse

logger = logging.getLogger("events")

_PRIORITIES = {p.value for p in Priority}


def _owned(identity: Identity, event_id: int):
    return (Event.id == event_id, Event.created_by == identity.user_id)


class EventService:
    async def create(self, db: AsyncSession, identity: Identity, payload: EventCreate) -> Event:
        fields = payload.model_dump()
        fields["priority"] = payload.priority.value
        event = Event(**fields, created_by=identity.user_id, is_completed=False)
        db.add(event)
        await db.commit()
        await db.refresh(event)
        logger.info("User %s created event %s", identity.user_id, event.id)
        return event

    async def list_mine(self, db: AsyncSession, identity: Identity) -> List[Event]:
        result = await db.execute(
            select(Event)
            .where(Event.created_by == identity.user_id)
            .order_by(Event.date.asc(), Event.id.asc())
        )
        return list(result.scalars().all())

    async def _update_owned(
        self, db: AsyncSession, identity: Identity, event_id: int, **values
    ) -> Event:
        result = await db.execute(
            update(Event)
            .where(*_owned(identity, event_id))
            .values(**values)
            .returning(Event)
        )
        event = result.scalar_one_or_none()
        if event is None:
            await db.rollback()
            raise NotFoundError("Event not found")
        await db.commit()
        return event

    async def update_priority(
        self, db: AsyncSession, identity: Identity, event_id: int, priority: Optional[str]
    ) -> Event:
        if priority not in _PRIORITIES:
            raise ValidationError("Invalid priority")
        event = await self._update_owned(db, identity, event_id, priority=priority)
        logger.info("User %s set event %s priority to %s", identity.user_id, event_id, priority)
        return event

    async def mark_complete(self, db: AsyncSession, identity: Identity, event_id: int) -> Event:
        event = await self._update_owned(db, identity, event_id, is_completed=True)
        logger.info("User %s completed event %s", identity.user_id, event_id)
        return event

    async def delete(self, db: AsyncSession, identity: Identity, event_id: int) -> MessageResponse:
        result = await db.execute(
            delete(Event).where(*_owned(identity, event_id)).returning(Event.id)
        )
        if result.scalar_one_or_none() is None:
            await db.rollback()
            raise NotFoundError("Event not found")
        await db.commit()
        logger.info("User %s deleted event %s", identity.user_id, event_id)
        return MessageResponse(message="Event deleted successfully")
