from __future__ import annotations

import logging

from club_realtime.application.dto.chat import NewChatMessage
from club_realtime.application.dto.events import DispatchEvent
from club_realtime.application.exceptions import ValidationError
from club_realtime.application.ports.dispatch import Dispatcher, UserTarget
from club_realtime.application.uow import UnitOfWork
from club_realtime.domain.entities.chat_message import ChatMessage
from club_realtime.domain.value_objects.enums import EventType
from club_realtime.services.delivery import chat_message_payload, push

logger = logging.getLogger(__name__)


async def send_chat_message(
    from_user_id: int,
    to_user_id: int | None,
    text: str,
    uow: UnitOfWork,
    dispatcher: Dispatcher,
    *,
    club_id: int | None = None,
) -> ChatMessage:
    """Persist a chat message, then push it to the recipient if they are online.

    A message without a recipient is a club-wide broadcast: stored for the pull
    endpoint, never pushed. The returned message is the durable record whether
    or not the push reached anyone.
    """
    if not text or not text.strip():
        raise ValidationError("Message text is required")
    if to_user_id is not None and not await uow.users.exists(to_user_id):
        raise ValidationError(f"Recipient {to_user_id} not found")

    msg = await uow.messages_w.create(
        NewChatMessage(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            message=text,
            club_id=club_id,
        )
    )
    await uow.commit()
    logger.info("Chat message %s stored: %s -> %s", msg.id, from_user_id, to_user_id)

    if not msg.is_broadcast:
        push(
            dispatcher,
            UserTarget(msg.to_user_id),
            DispatchEvent(type=EventType.NEW_MESSAGE, data=chat_message_payload(msg)),
        )
    return msg


async def mark_read(
    reader_id: int,
    from_user_id: int,
    uow: UnitOfWork,
    dispatcher: Dispatcher,
) -> int:
    """Mark everything ``from_user_id`` sent to ``reader_id`` as read and tell the sender."""
    updated = await uow.messages_w.mark_read(reader_id, from_user_id)
    await uow.commit()

    push(
        dispatcher,
        UserTarget(from_user_id),
        DispatchEvent(type=EventType.MESSAGES_READ, data={"readBy": reader_id}),
    )
    return updated


async def list_messages(
    user_id: int,
    with_user_id: int | None,
    club_id: int | None,
    limit: int,
    uow: UnitOfWork,
) -> list[ChatMessage]:
    return await uow.messages.list_messages(
        user_id, with_user_id=with_user_id, club_id=club_id, limit=limit,
    )
