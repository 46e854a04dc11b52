"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.repositories.entity_store import DepositSchedule
from domain.services.group_service import GroupService
from domain.services.name_service import NameService
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_deposit_schedule() -> DepositSchedule:
    """Deposit schedule from settings."""
    return DepositSchedule(
        overhead_bytes=settings.storage_overhead_bytes,
        per_byte=settings.deposit_per_byte,
    )


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""
    deposits = get_deposit_schedule()

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory, deposits)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_group_service() -> GroupService:
    """Get Group service instance."""
    return GroupService(get_uow_factory())


@lru_cache
def get_post_service() -> PostService:
    """Get Post service instance."""
    return PostService(get_uow_factory())


@lru_cache
def get_name_service() -> NameService:
    """Get Name service instance."""
    return NameService(get_uow_factory())
