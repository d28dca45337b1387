import attrs

from src.service.seat_inventory.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class UserEntity:
    """Authenticated caller, rebuilt from the JWT claims on every request."""

    id: int
    email: str = ''
    name: str = ''
    role: UserRole = UserRole.USER
    is_active: bool = True
