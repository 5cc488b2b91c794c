"""
Realtime service for pushing events to connected clients.

Every socket joins `user_<id>`; chat screens additionally join
`chat_<room_id>`. Events are dispatched to consumer handlers by `type`.
"""

import asyncio
import logging
from typing import Dict, Iterable
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def user_group(user_id) -> str:
    return f'user_{user_id}'


def room_group(room_id) -> str:
    return f'chat_{room_id}'


class RealtimeService:
    """
    Fan-out of server-side events over the channel layer
    """

    @property
    def channel_layer(self):
        return get_channel_layer()

    def _is_async_context(self) -> bool:
        try:
            asyncio.get_running_loop()
            return True
        except RuntimeError:
            return False

    def _group_send(self, group: str, message: Dict) -> None:
        layer = self.channel_layer
        if layer is None:
            logger.warning(f'Channel layer not configured, dropping {message["type"]}')
            return

        if self._is_async_context():
            asyncio.ensure_future(layer.group_send(group, message))
        else:
            async_to_sync(layer.group_send)(group, message)

    def emit_chat_message(self, recipient_ids: Iterable, room_id, message: Dict) -> None:
        """
        Push a new chat message to every participant and to the room group

        Consumers drop a message id they already delivered, so a socket
        in both a user group and the room group sees it once.
        """
        event = {'type': 'chat_message', 'data': {'message': message, 'roomId': str(room_id)}}

        for user_id in set(str(u) for u in recipient_ids):
            self._group_send(user_group(user_id), event)
        self._group_send(room_group(room_id), event)

        logger.info(f'Emitted chat message {message.get("id")} to room {room_id}')

    def emit_verification_update(self, user_id, verification: Dict, notice: str) -> None:
        """
        Tell a user their business verification changed status
        """
        self._group_send(
            user_group(user_id),
            {
                'type': 'verification_update',
                'data': {
                    'verification': verification,
                    'notice': notice,
                }
            }
        )
        logger.info(f'Emitted verification update to user {user_id}: {verification.get("status")}')


# Create singleton instance
realtime_service = RealtimeService()
