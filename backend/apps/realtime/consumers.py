"""
WebSocket consumer for realtime events.

Client -> server events:
    {"event": "ping", "timestamp": ...}
    {"event": "subscribe_room", "roomId": ...}
    {"event": "unsubscribe_room", "roomId": ...}

Server -> client events:
    authenticated, pong, subscribed, unsubscribed, chat_message,
    verification_update, error
"""

import json
import logging
from collections import deque
from channels.generic.websocket import AsyncWebsocketConsumer
from channels.db import database_sync_to_async

from apps.core.exceptions import AppError
from .services import user_group, room_group

logger = logging.getLogger(__name__)

# Message ids remembered per socket for duplicate suppression
SEEN_MESSAGE_WINDOW = 200


class EventsConsumer(AsyncWebsocketConsumer):
    """
    One socket per signed-in browser tab
    """

    async def connect(self):
        user = self.scope.get('user')
        if user is None or not getattr(user, 'is_authenticated', False):
            await self.close(code=4001)
            return

        self.user_id = str(user.user_id)
        self.email = user.email
        self.rooms = set()
        self.seen_messages = deque(maxlen=SEEN_MESSAGE_WINDOW)

        await self.accept()
        await self.channel_layer.group_add(user_group(self.user_id), self.channel_name)

        await self._send_event('authenticated', {'userId': self.user_id, 'email': self.email})
        logger.info(f'User {self.user_id} connected to realtime events')

    async def disconnect(self, close_code):
        if not hasattr(self, 'user_id'):
            return

        await self.channel_layer.group_discard(user_group(self.user_id), self.channel_name)
        for room_id in list(self.rooms):
            await self.channel_layer.group_discard(room_group(room_id), self.channel_name)

        logger.info(f'User {self.user_id} disconnected ({close_code})')

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '')
        except ValueError:
            await self._send_event('error', {'message': 'Invalid JSON'})
            return
        if not isinstance(data, dict):
            await self._send_event('error', {'message': 'Event must be a JSON object'})
            return

        event_type = data.get('event')

        if event_type == 'ping':
            await self.send(text_data=json.dumps({'event': 'pong', 'timestamp': data.get('timestamp')}))

        elif event_type == 'subscribe_room':
            await self._subscribe_room(data.get('roomId'))

        elif event_type == 'unsubscribe_room':
            room_id = str(data.get('roomId'))
            if room_id in self.rooms:
                self.rooms.discard(room_id)
                await self.channel_layer.group_discard(room_group(room_id), self.channel_name)
            await self._send_event('unsubscribed', {'roomId': room_id})

        else:
            await self._send_event('error', {'message': f'Unknown event: {event_type}'})

    async def _subscribe_room(self, room_id):
        if not room_id:
            await self._send_event('error', {'message': 'roomId is required'})
            return

        try:
            await self._check_room_access(room_id)
        except AppError as e:
            await self._send_event('error', {'code': e.code, 'message': e.message})
            return

        room_id = str(room_id)
        self.rooms.add(room_id)
        await self.channel_layer.group_add(room_group(room_id), self.channel_name)
        await self._send_event('subscribed', {'roomId': room_id})

    @database_sync_to_async
    def _check_room_access(self, room_id):
        from apps.chat.services import chat_service

        chat_service.get_room(self.user_id, room_id)

    async def _send_event(self, event: str, data: dict):
        await self.send(text_data=json.dumps({'event': event, 'data': data}))

    # Channel layer handlers

    async def chat_message(self, event):
        """
        New chat message; delivered once even when the socket sits in both
        the user group and the room group
        """
        message_id = event['data']['message'].get('id')
        if message_id in self.seen_messages:
            return
        self.seen_messages.append(message_id)

        await self._send_event('chat_message', event['data'])

    async def verification_update(self, event):
        await self._send_event('verification_update', event['data'])
