"""
WebSocket authentication middleware.

Browsers cannot set headers on a websocket handshake, so the access token
travels in the query string: ws/events/?token=<jwt>
"""

import logging
import jwt
from urllib.parse import parse_qs
from channels.middleware import BaseMiddleware

from apps.core.authentication import decode_access_token

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseMiddleware):
    """
    Put the TokenUser behind `?token=` into scope['user'] (None when the
    token is missing or invalid)
    """

    async def __call__(self, scope, receive, send):
        query_params = parse_qs(scope.get('query_string', b'').decode())
        token = query_params.get('token', [None])[0]

        scope = dict(scope)
        scope['user'] = None

        if token:
            try:
                scope['user'] = decode_access_token(token)
            except jwt.ExpiredSignatureError:
                logger.info('Websocket rejected: access token expired')
            except jwt.InvalidTokenError:
                logger.info('Websocket rejected: invalid access token')

        return await super().__call__(scope, receive, send)
