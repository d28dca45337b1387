"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.seat_inventory.domain.booking_window_policy import BookingWindowPolicy
from src.service.seat_inventory.driven_adapter.policy.static_discount_policy import (
    StaticDiscountPolicy,
)
from src.service.seat_inventory.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database, read_only=False)
    read_database = providers.Singleton(Database, read_only=True)

    # Unit of Work (one per use case instance; a new session per `async with`)
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session_maker
    )
    read_unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=read_database.provided.session_maker
    )

    # Domain policies
    booking_window_policy = providers.Singleton(
        BookingWindowPolicy.from_settings,
        late_show_types=config_service.provided.LATE_BOOKING_SHOW_TYPES,
        grace_minutes=config_service.provided.LATE_BOOKING_GRACE_MINUTES,
    )
    discount_policy = providers.Singleton(
        StaticDiscountPolicy,
        promotion_codes=config_service.provided.PROMOTION_CODES,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
