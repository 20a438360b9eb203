"""
User service - Authentication and user profiles.

Identity is always checked by the remote auth service; only the profile
record falls back to fixture data.
"""

import logging
from typing import Dict, List, Optional

from bookswap.error_handling import NotFoundError
from bookswap.models import (
    DEFAULT_RATING,
    AuthIdentity,
    User,
    UserCredentials,
    UserProfileUpdate,
    UserRegistration,
)
from bookswap.remote.client import Filter
from bookswap.remote.schema import TableGroup
from bookswap.services.fallback import FallbackService
from bookswap.time_utils import utc_now

logger = logging.getLogger(__name__)

PROFILES_TABLE = "user_profiles"


class UserService(FallbackService):
    """Sign-in, sign-up and profile access"""

    group = TableGroup.USERS

    def _fixture_profile(self, identity: AuthIdentity) -> User:
        """
        Profile for an identity when profiles are served from fixtures.

        A seed profile with the same email, or a synthesized one, is stored
        under the identity's id so later lookups by id find it.
        """
        user = self.store.get_user(identity.id)
        if user:
            return user
        seed = self.store.find_user_by_email(identity.email)
        if seed:
            user = seed.model_copy(update={"id": identity.id, "email": identity.email})
        else:
            user = User.synthesize(identity)
        return self.store.link_user(user)

    async def _fetch_profile_row(self, user_id: str) -> Optional[dict]:
        rows = await self.client.query(PROFILES_TABLE, filters=[Filter.eq("id", user_id)], limit=1)
        return rows[0] if rows else None

    async def sign_in(self, credentials: UserCredentials) -> User:
        """
        Verify credentials and load the user's profile.

        Raises:
            AuthenticationError: Credentials rejected
            NotFoundError: Identity has no profile row
        """
        identity = await self.client.authenticate(credentials.email, credentials.password)
        logger.info(f"Signed in {identity.email}")

        async def remote() -> User:
            row = await self._fetch_profile_row(identity.id)
            if row is None:
                raise NotFoundError(f"User profile not found: {identity.id}")
            return User.from_profile_row(row, email=identity.email)

        async def fixture() -> User:
            return self._fixture_profile(identity)

        return await self._dispatch("sign_in", remote, fixture)

    async def sign_up(self, registration: UserRegistration) -> User:
        """
        Create an identity and its profile.

        Raises:
            ConflictError: Email already registered
        """
        identity = await self.client.create_identity(registration.email, registration.password)
        logger.info(f"Registered {identity.email}")

        async def remote() -> User:
            row = await self.client.insert(PROFILES_TABLE, {
                "id": identity.id,
                "email": identity.email,
                "name": registration.name,
                "join_date": utc_now().isoformat(),
                "rating": DEFAULT_RATING,
            })
            return User.from_profile_row(row, email=identity.email)

        async def fixture() -> User:
            return self.store.add_user(User.synthesize(identity, name=registration.name))

        return await self._dispatch("sign_up", remote, fixture)

    async def sign_out(self) -> None:
        await self.client.sign_out()

    async def get_current_user(self) -> Optional[User]:
        """Profile of the signed-in user; None when signed out or unprofiled."""
        session = await self.client.get_session()
        if session is None:
            return None
        identity = session.user

        async def remote() -> Optional[User]:
            row = await self._fetch_profile_row(identity.id)
            return User.from_profile_row(row, email=identity.email) if row else None

        async def fixture() -> Optional[User]:
            return self._fixture_profile(identity)

        return await self._dispatch("get_current_user", remote, fixture)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        async def remote() -> Optional[User]:
            row = await self._fetch_profile_row(user_id)
            return User.from_profile_row(row) if row else None

        async def fixture() -> Optional[User]:
            return self.store.get_user(user_id)

        return await self._dispatch("get_user_by_id", remote, fixture)

    async def get_users_by_ids(self, user_ids: List[str]) -> Dict[str, User]:
        """Profiles keyed by id; ids without a profile are absent."""
        wanted = list(dict.fromkeys(user_ids))
        if not wanted:
            return {}

        async def remote() -> Dict[str, User]:
            rows = await self.client.query(PROFILES_TABLE, filters=[Filter.in_("id", wanted)])
            return {row["id"]: User.from_profile_row(row) for row in rows}

        async def fixture() -> Dict[str, User]:
            users = (self.store.get_user(uid) for uid in wanted)
            return {u.id: u for u in users if u is not None}

        return await self._dispatch("get_users_by_ids", remote, fixture)

    async def update_profile(self, user_id: str, update: UserProfileUpdate) -> User:
        """
        Apply a partial profile update.

        Raises:
            NotFoundError: No profile with this id
        """
        changes = update.changes()
        if not changes:
            user = await self.get_user_by_id(user_id)
            if user is None:
                raise NotFoundError(f"User not found: {user_id}")
            return user

        async def remote() -> User:
            rows = await self.client.update(PROFILES_TABLE, [Filter.eq("id", user_id)], changes)
            if not rows:
                raise NotFoundError(f"User not found: {user_id}")
            return User.from_profile_row(rows[0])

        async def fixture() -> User:
            return self.store.update_user(user_id, changes)

        return await self._dispatch("update_profile", remote, fixture)
