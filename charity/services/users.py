"""Account profile: a user's public fields plus their cases and donations."""

from charity.core.errors import UserNotFoundError
from charity.core.repository_protocols import CasePersistence, DonationPersistence, UserDirectory
from charity.models import User
from charity.schemas.auth import UserProfile
from charity.schemas.case import CaseRead
from charity.schemas.donation import DonationRead


class UserService:
    def __init__(
        self,
        users: UserDirectory,
        cases: CasePersistence,
        donations: DonationPersistence,
    ) -> None:
        self._users = users
        self._cases = cases
        self._donations = donations

    def get_account(self, username: str) -> UserProfile:
        """Profile of the named user. Raises UserNotFoundError."""
        user = self._users.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        return self.profile_for(user)

    def profile_for(self, user: User) -> UserProfile:
        return UserProfile(
            username=user.username,
            email=user.email,
            cases=[CaseRead.model_validate(c) for c in self._cases.find_by_owner(user.id)],
            donations=[
                DonationRead.model_validate(d) for d in self._donations.find_by_user(user.id)
            ],
        )
