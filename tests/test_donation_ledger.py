"""Tests for the donation ledger: validation, atomic total updates and concurrent donors."""

import os
import tempfile
import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy import func, select

from charity.core.errors import (
    CaseNotFoundError,
    DomainValidationError,
    StorageError,
    UserNotFoundError,
)
from charity.models import Case, Donation
from charity.repositories import SqlCaseRepository, SqlDonationRepository, SqlUserDirectory
from charity.schemas.donation import PaymentMethod
from charity.services.donation_ledger import DonationLedger, parse_amount
from support import add_case, add_category, add_user, file_session_factory, memory_session_factory


def _ledger(session) -> DonationLedger:
    return DonationLedger(
        SqlUserDirectory(session),
        SqlCaseRepository(session),
        SqlDonationRepository(session),
    )


def _donation_count(session) -> int:
    return session.scalar(select(func.count()).select_from(Donation))


def _raised(session, case_id: int) -> Decimal:
    return session.scalar(select(Case.raised_amount).where(Case.id == case_id))


class TestParseAmount(unittest.TestCase):
    def test_accepts_cents(self) -> None:
        self.assertEqual(parse_amount(Decimal("0.01")), Decimal("0.01"))
        self.assertEqual(parse_amount("12.5"), Decimal("12.50"))
        self.assertEqual(parse_amount(7), Decimal("7.00"))
        self.assertEqual(parse_amount(19.99), Decimal("19.99"))

    def test_rejects_invalid_amounts(self) -> None:
        bad = [0, Decimal("0.00"), -1, Decimal("-0.01"), Decimal("0.001"), "1.005",
               "NaN", "Infinity", "abc", None, True, Decimal("1e30")]
        for amount in bad:
            with self.subTest(amount=amount):
                with self.assertRaises(DomainValidationError):
                    parse_amount(amount)


class LedgerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session = memory_session_factory()()
        self.addCleanup(self.session.close)
        self.owner = add_user(self.session, "owner")
        self.donor = add_user(self.session, "donor")
        self.category = add_category(self.session)
        self.case = add_case(self.session, self.owner, self.category)
        self.ledger = _ledger(self.session)


class TestRecordDonation(LedgerTestCase):
    def test_donation_raises_total_and_is_listed(self) -> None:
        donation = self.ledger.record_donation(
            self.case.id, "donor", Decimal("50.00"), PaymentMethod.CREDIT_CARD
        )
        self.assertIsNotNone(donation.id)
        self.assertEqual(donation.amount, Decimal("50.00"))
        self.assertEqual(donation.user_id, self.donor.id)
        self.assertEqual(donation.payment_method, "CREDIT_CARD")
        self.assertIsNotNone(donation.created_at)
        self.assertEqual(_raised(self.session, self.case.id), Decimal("50.00"))
        self.assertEqual(self.ledger.donations_for_case(self.case.id), [donation])

    def test_total_equals_sum_in_insertion_order(self) -> None:
        amounts = [Decimal("10.00"), Decimal("0.01"), Decimal("99.99"), Decimal("5.50")]
        for amount in amounts:
            self.ledger.record_donation(self.case.id, "donor", amount, "PAYPAL")
        listed = self.ledger.donations_for_case(self.case.id)
        self.assertEqual([d.amount for d in listed], amounts)
        self.assertEqual(_raised(self.session, self.case.id), sum(amounts))

    def test_donations_for_user(self) -> None:
        other = add_case(self.session, self.owner, self.category, title="Roof repair")
        self.ledger.record_donation(self.case.id, "donor", "20", "DEBIT_CARD")
        self.ledger.record_donation(other.id, "donor", "30", "BANK_TRANSFER")
        self.ledger.record_donation(other.id, "owner", "1", "PAYPAL")
        mine = self.ledger.donations_for_user("donor")
        self.assertEqual([d.case_id for d in mine], [self.case.id, other.id])
        with self.assertRaises(UserNotFoundError):
            self.ledger.donations_for_user("ghost")

    def test_donations_for_unknown_case(self) -> None:
        with self.assertRaises(CaseNotFoundError):
            self.ledger.donations_for_case(9999)

    def test_invalid_amount_changes_nothing(self) -> None:
        for amount in [Decimal("0"), Decimal("-5"), Decimal("1.234"), "NaN", "abc", True]:
            with self.subTest(amount=amount):
                with self.assertRaises(DomainValidationError):
                    self.ledger.record_donation(self.case.id, "donor", amount, "PAYPAL")
        self.assertEqual(_raised(self.session, self.case.id), Decimal("0"))
        self.assertEqual(_donation_count(self.session), 0)

    def test_invalid_payment_method(self) -> None:
        with self.assertRaises(DomainValidationError):
            self.ledger.record_donation(self.case.id, "donor", "10", "BITCOIN")
        self.assertEqual(_donation_count(self.session), 0)

    def test_unknown_case_writes_nothing(self) -> None:
        with self.assertRaises(CaseNotFoundError) as ctx:
            self.ledger.record_donation(424242, "donor", "10", "PAYPAL")
        self.assertEqual(ctx.exception.identifier, 424242)
        self.assertEqual(_donation_count(self.session), 0)

    def test_unknown_donor_writes_nothing(self) -> None:
        with self.assertRaises(UserNotFoundError):
            self.ledger.record_donation(self.case.id, "ghost", "10", "PAYPAL")
        self.assertEqual(_raised(self.session, self.case.id), Decimal("0"))
        self.assertEqual(_donation_count(self.session), 0)


class TestValidationBeforeWrite(unittest.TestCase):
    """Nothing reaches the donation store unless every check passed."""

    def test_missing_case_never_calls_save(self) -> None:
        users, cases, donations = MagicMock(), MagicMock(), MagicMock()
        cases.find_by_id.return_value = None
        ledger = DonationLedger(users, cases, donations)
        with self.assertRaises(CaseNotFoundError):
            ledger.record_donation(1, "donor", "10", "PAYPAL")
        donations.save.assert_not_called()

    def test_bad_amount_never_looks_up_anything(self) -> None:
        users, cases, donations = MagicMock(), MagicMock(), MagicMock()
        ledger = DonationLedger(users, cases, donations)
        with self.assertRaises(DomainValidationError):
            ledger.record_donation(1, "donor", "-1", "PAYPAL")
        users.find_by_username.assert_not_called()
        donations.save.assert_not_called()


class TestAtomicSave(LedgerTestCase):
    """The insert and the total update commit together or not at all."""

    def test_failed_insert_rolls_back_total(self) -> None:
        self.ledger.record_donation(self.case.id, "donor", Decimal("100.00"), "PAYPAL")
        repo = SqlDonationRepository(self.session)

        # The UPDATE succeeds; the INSERT then violates amount > 0.
        bad = Donation(amount=Decimal("-1"), payment_method="PAYPAL", case_id=self.case.id, user_id=self.donor.id)
        with self.assertRaises(StorageError):
            repo.save(bad)

        self.assertEqual(_raised(self.session, self.case.id), Decimal("100.00"))
        self.assertEqual(_donation_count(self.session), 1)

    def test_repository_rejects_missing_case(self) -> None:
        repo = SqlDonationRepository(self.session)
        orphan = Donation(amount=Decimal("5"), payment_method="PAYPAL", case_id=777, user_id=self.donor.id)
        with self.assertRaises(CaseNotFoundError):
            repo.save(orphan)
        self.assertEqual(_donation_count(self.session), 0)


class TestConcurrentDonations(unittest.TestCase):
    """Fifty donors hitting one case at once: no lost updates."""

    WORKERS = 50

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.factory = file_session_factory(os.path.join(tmp.name, "ledger.db"))
        with self.factory() as session:
            owner = add_user(session, "owner")
            category = add_category(session)
            self.case_id = add_case(session, owner, category).id
            for i in range(self.WORKERS):
                add_user(session, f"donor{i}")

    def test_total_matches_sum_of_donations(self) -> None:
        barrier = threading.Barrier(self.WORKERS, timeout=30)
        amounts = [Decimal(i + 1) + Decimal("0.25") for i in range(self.WORKERS)]

        def donate(i: int) -> None:
            with self.factory() as session:
                ledger = _ledger(session)
                barrier.wait()
                ledger.record_donation(self.case_id, f"donor{i}", amounts[i], "CREDIT_CARD")

        with ThreadPoolExecutor(max_workers=self.WORKERS) as pool:
            futures = [pool.submit(donate, i) for i in range(self.WORKERS)]
            for future in futures:
                future.result()

        with self.factory() as session:
            self.assertEqual(_donation_count(session), self.WORKERS)
            self.assertEqual(_raised(session, self.case_id), sum(amounts))
            self.assertEqual(
                session.scalar(select(func.sum(Donation.amount)).where(Donation.case_id == self.case_id)),
                sum(amounts),
            )


if __name__ == "__main__":
    unittest.main()
