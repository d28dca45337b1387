from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.domain.enum.user_role import UserRole
from src.service.seat_inventory.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class TestJwtAuth:
    @pytest.fixture
    def jwt_auth(self):
        return JwtAuth()

    def test_token_round_trips_user(self, jwt_auth):
        user = UserEntity(id=7, email='o@example.com', name='Olive', role=UserRole.ORGANIZER)

        token = jwt_auth.create_jwt_token(user)

        assert jwt_auth.get_current_user_info_from_jwt(token) == user

    def test_missing_token(self, jwt_auth):
        with pytest.raises(AuthenticationError, match='Not authenticated'):
            jwt_auth.get_current_user_info_from_jwt(None)

    def test_expired_token(self, jwt_auth):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {'user_id': 1, 'role': 'user', 'exp': now - timedelta(minutes=1)},
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(AuthenticationError, match='Token expired'):
            jwt_auth.get_current_user_info_from_jwt(token)

    def test_foreign_signature_rejected(self, jwt_auth):
        token = jwt.encode({'user_id': 1, 'role': 'user'}, 'x' * 32, algorithm='HS256')

        with pytest.raises(AuthenticationError, match='Invalid token'):
            jwt_auth.get_current_user_info_from_jwt(token)

    def test_unknown_role_rejected(self, jwt_auth):
        token = jwt.encode(
            {'user_id': 1, 'role': 'buyer'},
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(AuthenticationError):
            jwt_auth.get_current_user_info_from_jwt(token)

    def test_inactive_user_forbidden(self, jwt_auth):
        token = jwt_auth.create_jwt_token(UserEntity(id=3, is_active=False))

        with pytest.raises(ForbiddenError):
            jwt_auth.get_current_user_info_from_jwt(token)
