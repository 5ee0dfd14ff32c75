"""Trigger handler for chat messages.

Messages live under ``conversations/{conversationId}/messages``. The
recipient is the conversation participant who is not the sender.
"""

import structlog

from notifications.notification.helpers import NotificationHandler
from runtime.platform import ChangeEvent, EventPlatform, best_effort
from shared.events.coaching import DomainEvent, EventKind
from shared.store.collections import CONVERSATION_MESSAGES, CONVERSATIONS

logger = structlog.get_logger(__name__)


class MessageEventsHandler(NotificationHandler):
    def register(self, platform: EventPlatform) -> None:
        platform.on_create(CONVERSATION_MESSAGES, self.on_message_sent)

    @best_effort
    async def on_message_sent(self, change: ChangeEvent) -> None:
        message = change.after
        sender_id = message.get("senderId")
        conversation_id = change.params.get("conversationId") or message.get("conversationId")
        if not conversation_id:
            logger.info("Message has no conversation, skipping", message_id=change.document_id)
            return

        conversation = await self.fetch(CONVERSATIONS, conversation_id)
        if not conversation:
            logger.info("Conversation not found, skipping", conversation_id=conversation_id)
            return

        participants = conversation.get("participants") or []
        recipient_id = next((p for p in participants if p and p != sender_id), None)
        if recipient_id is None:
            logger.info("No other participant, skipping", conversation_id=conversation_id)
            return

        await self.notify(
            DomainEvent(
                kind=EventKind.MESSAGE_RECEIVED,
                recipient_id=recipient_id,
                actor_id=sender_id,
                actor_name=await self.name_of(sender_id),
                entity_id=conversation_id,
                description=message.get("text"),
            )
        )
