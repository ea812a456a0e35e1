"""Donation ledger: records donations and keeps each case's raised_amount equal to their sum."""

import logging
from decimal import Decimal, InvalidOperation

from charity.core.errors import CaseNotFoundError, DomainValidationError, UserNotFoundError
from charity.core.repository_protocols import CasePersistence, DonationPersistence, UserDirectory
from charity.models import Donation
from charity.schemas.donation import PaymentMethod

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Numeric(12, 2): ten integer digits.
MAX_AMOUNT = Decimal("9999999999.99")


def parse_amount(amount: Decimal | int | str | float) -> Decimal:
    """Normalize a donation amount; raise DomainValidationError unless it is a positive sum of cents."""
    if isinstance(amount, bool):
        raise DomainValidationError("Donation amount must be a number")
    try:
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise DomainValidationError("Donation amount must be a number") from e
    if not value.is_finite():
        raise DomainValidationError("Donation amount must be a finite number")
    if value <= 0:
        raise DomainValidationError("Donation amount must be greater than zero")
    # Checked before quantize, which fails past the context precision.
    if value > MAX_AMOUNT:
        raise DomainValidationError("Donation amount is too large")
    if value != value.quantize(CENT):
        raise DomainValidationError("Donation amount must have at most 2 decimal places")
    return value.quantize(CENT)


def parse_payment_method(payment_method: PaymentMethod | str) -> PaymentMethod:
    try:
        return PaymentMethod(payment_method)
    except ValueError as e:
        raise DomainValidationError(f"Unsupported payment method: {payment_method}") from e


class DonationLedger:
    def __init__(
        self,
        users: UserDirectory,
        cases: CasePersistence,
        donations: DonationPersistence,
    ) -> None:
        self._users = users
        self._cases = cases
        self._donations = donations

    def record_donation(
        self,
        case_id: int,
        donor_username: str,
        amount: Decimal | int | str,
        payment_method: PaymentMethod | str,
    ) -> Donation:
        """
        Record a donation by donor_username to case_id.

        Every check (amount, payment method, donor, case) runs before anything is
        written. The insert and the raised_amount increment then commit as one unit.
        Raises DomainValidationError, UserNotFoundError or CaseNotFoundError.
        """
        value = parse_amount(amount)
        method = parse_payment_method(payment_method)

        donor = self._users.find_by_username(donor_username)
        if donor is None:
            raise UserNotFoundError(donor_username)
        if self._cases.find_by_id(case_id) is None:
            raise CaseNotFoundError(case_id)

        donation = self._donations.save(
            Donation(
                amount=value,
                payment_method=method.value,
                case_id=case_id,
                user_id=donor.id,
            )
        )
        logger.info(
            "Donation recorded: id=%s case_id=%s amount=%s donor=%s",
            donation.id,
            case_id,
            value,
            donor_username,
        )
        return donation

    def donations_for_case(self, case_id: int) -> list[Donation]:
        """Donations to case_id in insertion order. Raises CaseNotFoundError."""
        if self._cases.find_by_id(case_id) is None:
            raise CaseNotFoundError(case_id)
        return self._donations.find_by_case(case_id)

    def donations_for_user(self, username: str) -> list[Donation]:
        """Donations made by username. Raises UserNotFoundError."""
        user = self._users.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        return self._donations.find_by_user(user.id)
