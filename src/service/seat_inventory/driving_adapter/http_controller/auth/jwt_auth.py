"""
JWT authentication (stateless, no user table)

Tokens are issued by the platform's identity service; this service only
verifies them and rebuilds the caller from the claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.domain.enum.user_role import UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'name': user_entity.name,
            'role': user_entity.role.value,
            'is_active': user_entity.is_active,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('Token expired')
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        role = payload.get('role')
        is_active = payload.get('is_active', True)

        if not user_id or not role:
            raise AuthenticationError('Invalid token')

        try:
            user_role = UserRole(role)
        except ValueError:
            raise AuthenticationError('Invalid token')

        # Rebuild UserEntity from JWT payload (no DB query)
        user_entity = UserEntity(
            id=int(user_id),
            email=payload.get('email') or '',
            name=payload.get('name') or '',
            role=user_role,
            is_active=bool(is_active),
        )

        if not user_entity.is_active:
            raise ForbiddenError('User is inactive')

        return user_entity
