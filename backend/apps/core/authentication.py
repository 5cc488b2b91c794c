"""
DRF JWT Authentication class.

Integrates JWT authentication with Django Rest Framework.
"""

from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
import jwt
from django.conf import settings


class TokenUser:
    """
    The caller behind a verified access token.

    Only carries what the token holds; services load the User row when
    they need more.
    """
    is_authenticated = True
    is_anonymous = False

    def __init__(self, user_id: str, email: str):
        self.user_id = user_id
        self.email = email

    @property
    def id(self):
        return self.user_id

    def __repr__(self):
        return f'TokenUser({self.user_id}, {self.email})'


def decode_access_token(token: str) -> TokenUser:
    """
    Verify an access token and build the TokenUser it names.

    Raises:
        jwt.InvalidTokenError: (or ExpiredSignatureError) on a bad token
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM]
    )
    if not payload.get('userId'):
        raise jwt.InvalidTokenError('Token has no subject')
    return TokenUser(payload['userId'], payload.get('email'))


class JWTAuthentication(BaseAuthentication):
    """
    JWT Authentication for Django Rest Framework

    This class integrates with DRF's permission system.
    """

    def authenticate(self, request):
        """
        Authenticate the request using JWT token

        Returns:
            Tuple of (TokenUser, token) if authenticated
            None if no authentication attempted

        Raises:
            AuthenticationFailed if authentication fails
        """
        # Get token from Authorization header
        auth_header = request.META.get('HTTP_AUTHORIZATION', '')

        if not auth_header:
            return None  # No authentication attempted

        # Extract token (Bearer TOKEN format)
        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != 'bearer':
            raise AuthenticationFailed('Authorization header must be in format: Bearer <token>')

        token = parts[1]

        try:
            return (decode_access_token(token), token)

        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed('Access token has expired')

        except jwt.InvalidTokenError:
            raise AuthenticationFailed('Invalid access token')

    def authenticate_header(self, request):
        """
        Return the authentication header to use for 401 responses
        """
        return 'Bearer realm="api"'
