from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.service.seat_inventory.domain.access_policy import AccessPolicy
from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


AUTH_COOKIE_NAME = 'fastapiusersauth'

bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=AUTH_COOKIE_NAME),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserEntity:
    """
    Get current user from JWT token (stateless, no DB query)

    The auth cookie wins over an `Authorization: Bearer` header.
    """
    if not token and credentials is not None:
        token = credentials.credentials
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id,
            'user.role': current_user.role.value,
        },
    ):
        AccessPolicy.ensure_admin(current_user)
        return current_user


async def require_organizer(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    AccessPolicy.ensure_organizer(current_user)
    return current_user
