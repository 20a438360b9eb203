"""
Fallback dispatch for the marketplace services.

Each table group carries one sticky flag. While the flag is clear an
operation runs against the remote backend; the first relation-missing error
for one of the group's tables sets the flag and the same operation is served
from the fixture store instead, as is every later call.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Optional, TypeVar

from bookswap.config import MarketplaceSettings
from bookswap.error_handling import (
    ErrorHandler,
    NotAuthenticatedError,
    RelationMissingError,
)
from bookswap.fixtures import FixtureStore
from bookswap.remote.client import RemoteDataClient
from bookswap.remote.schema import TableGroup, group_for_relation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FallbackState:
    """
    Per-group fixture flags.

    Flags start clear (or all set when fixtures are forced) and are never
    cleared again for the lifetime of the object.
    """

    def __init__(self, force_fixtures: bool = False):
        self._flags: Dict[TableGroup, bool] = {group: force_fixtures for group in TableGroup}

    def is_active(self, group: TableGroup) -> bool:
        return self._flags[group]

    def activate(self, group: TableGroup) -> bool:
        """Set a group's flag; returns True if it was clear before."""
        was_clear = not self._flags[group]
        self._flags[group] = True
        return was_clear

    def owns(self, group: TableGroup, relation: Optional[str]) -> bool:
        """
        Whether a missing relation triggers this group's fallback.

        An error that names no relation is attributed to the failing group.
        """
        if not relation:
            return True
        return group_for_relation(relation) == group

    def snapshot(self) -> Dict[str, bool]:
        return {group.value: active for group, active in self._flags.items()}


@dataclass
class ServiceContext:
    """Collaborators shared by every service of one container."""
    client: RemoteDataClient
    store: FixtureStore
    fallback: FallbackState
    settings: MarketplaceSettings
    error_handler: ErrorHandler = field(default_factory=ErrorHandler)

    async def current_user_id(self) -> Optional[str]:
        """Id of the signed-in user, or None."""
        session = await self.client.get_session()
        return session.user.id if session else None

    async def require_user_id(self, action: str) -> str:
        user_id = await self.current_user_id()
        if not user_id:
            raise NotAuthenticatedError(f"User must be logged in to {action}")
        return user_id


class FallbackService:
    """Base class for services whose data lives in one table group."""

    group: TableGroup

    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx

    @property
    def store(self) -> FixtureStore:
        return self.ctx.store

    @property
    def client(self) -> RemoteDataClient:
        return self.ctx.client

    @property
    def using_fixtures(self) -> bool:
        return self.ctx.fallback.is_active(self.group)

    async def _fixture_delay(self) -> None:
        latency_ms = self.ctx.settings.fallback.fixture_latency_ms
        if latency_ms > 0:
            await asyncio.sleep(latency_ms / 1000)

    async def _dispatch(
        self,
        operation: str,
        remote: Callable[[], Awaitable[T]],
        fixture: Callable[[], Awaitable[T]]
    ) -> T:
        """
        Run an operation on the remote path or the fixture path.

        Args:
            operation: Name used in logs
            remote: Coroutine factory for the remote path
            fixture: Coroutine factory for the fixture path

        Returns:
            Result of whichever path served the call

        Raises:
            RelationMissingError: For a missing table of another group
            Exception: Any other remote failure, unchanged
        """
        if self.using_fixtures:
            logger.debug(f"{operation}: serving fixture data for {self.group.value}")
            await self._fixture_delay()
            return await fixture()

        try:
            return await remote()
        except RelationMissingError as e:
            if not self.ctx.fallback.owns(self.group, e.relation):
                self.ctx.error_handler.log_error(operation, e, group=self.group.value)
                raise
            if self.ctx.fallback.activate(self.group):
                self.ctx.error_handler.log_fallback(operation, e, group=self.group.value)
        except Exception as e:
            self.ctx.error_handler.log_error(operation, e, group=self.group.value)
            raise

        await self._fixture_delay()
        return await fixture()
