"""Tests for AccountService."""

import logging
from decimal import Decimal

import pytest

from peopleledger.domain.errors import (
    DuplicateAccountNumberError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
    ValidationErrors,
)


class TestCreateAccount:
    def test_balance_starts_at_zero(self, account_service, sample_person):
        account_id = account_service.create_account(person_id=sample_person.id, account_number="ACC-1")

        account = account_service.get_account(account_id)
        assert account.outstanding_balance == Decimal("0")
        assert account.person_id == sample_person.id
        assert account.is_closed is False

    def test_create_closed(self, closed_account):
        assert closed_account.is_closed is True

    def test_unknown_person(self, account_service):
        with pytest.raises(InvalidReferenceError, match="Invalid person selected"):
            account_service.create_account(person_id=999, account_number="ACC-1")

    def test_duplicate_number(self, account_service, sample_account):
        with pytest.raises(DuplicateAccountNumberError):
            account_service.create_account(
                person_id=sample_account.person_id, account_number=sample_account.account_number
            )

    def test_duplicate_number_is_global(self, account_service, person_service, sample_account):
        other = person_service.create_person(name="Bob", surname="Jones", id_number="999")

        with pytest.raises(DuplicateAccountNumberError):
            account_service.create_account(person_id=other, account_number=sample_account.account_number)

    def test_number_required(self, account_service, sample_person):
        with pytest.raises(ValidationError, match="Account Number is required"):
            account_service.create_account(person_id=sample_person.id, account_number=" ")

    def test_several_problems_reported_together(self, account_service, sample_account):
        with pytest.raises(ValidationErrors) as exc_info:
            account_service.create_account(person_id=999, account_number=sample_account.account_number)

        assert exc_info.value.has(InvalidReferenceError)
        assert exc_info.value.has(DuplicateAccountNumberError)
        assert len(exc_info.value.errors) == 2


class TestEditAccount:
    def test_keep_own_number_and_close(self, account_service, sample_account):
        account_service.edit_account(
            sample_account.id, account_number=sample_account.account_number, is_closed=True
        )

        account = account_service.get_account(sample_account.id)
        assert account.is_closed is True
        assert account.version == sample_account.version + 1

    def test_reopen(self, account_service, closed_account):
        account_service.edit_account(
            closed_account.id, account_number=closed_account.account_number, is_closed=False
        )
        assert account_service.get_account(closed_account.id).is_closed is False

    def test_rename(self, account_service, sample_account):
        account_service.edit_account(sample_account.id, account_number="NEW-1", is_closed=False)

        assert account_service.find_by_number("NEW-1").id == sample_account.id
        assert account_service.find_by_number(sample_account.account_number) is None

    def test_number_of_another_account(self, account_service, sample_account, closed_account):
        with pytest.raises(DuplicateAccountNumberError):
            account_service.edit_account(
                sample_account.id, account_number=closed_account.account_number, is_closed=False
            )

    def test_edit_does_not_touch_balance(self, account_service, sample_account, post):
        post(sample_account.id, "100")
        account_service.edit_account(sample_account.id, account_number="NEW-1", is_closed=True)

        assert account_service.get_account(sample_account.id).outstanding_balance == Decimal("100")

    def test_missing_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.edit_account(42, account_number="X", is_closed=False)


class TestDeleteAccount:
    def test_cascades_to_transactions(self, account_service, transaction_service, sample_account, post):
        posted = [post(sample_account.id, amount) for amount in ("10", "20", "-5")]

        removed = account_service.delete_account(sample_account.id)

        assert removed == 3
        assert account_service.get_account(sample_account.id) is None
        assert all(transaction_service.get_transaction(t) is None for t in posted)

    def test_other_accounts_untouched(self, account_service, transaction_service, sample_account, post):
        other_id = account_service.create_account(
            person_id=sample_account.person_id, account_number="OTHER"
        )
        post(sample_account.id, "10")
        kept = post(other_id, "20")

        account_service.delete_account(sample_account.id)

        assert transaction_service.get_transaction(kept) is not None
        assert account_service.get_account(other_id).outstanding_balance == Decimal("20")

    def test_delete_without_transactions(self, account_service, sample_account):
        assert account_service.delete_account(sample_account.id) == 0

    def test_missing_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.delete_account(42)


def test_get_account_with_transactions(account_service, sample_account, sample_person, post):
    post(sample_account.id, "100", description="Deposit")
    post(sample_account.id, "-40", description="Fee")

    details = account_service.get_account_with_transactions(sample_account.id)

    assert details.account.outstanding_balance == Decimal("60")
    assert details.person == sample_person
    assert {t.description for t in details.transactions} == {"Deposit", "Fee"}


def test_get_account_with_transactions_missing(account_service):
    with pytest.raises(NotFoundError):
        account_service.get_account_with_transactions(42)


class TestRecalculateBalance:
    def test_consistent_balance_is_unchanged(self, account_service, sample_account, post, admin, caplog):
        caplog.set_level(logging.INFO, logger="peopleledger")
        post(sample_account.id, "100")
        post(sample_account.id, "-30")

        assert account_service.recalculate_balance(sample_account.id, performed_by=admin) == Decimal("70")
        assert "corrected" not in caplog.text

    def test_drifted_balance_is_corrected(self, account_service, sample_account, post, admin, temp_db, caplog):
        caplog.set_level(logging.INFO, logger="peopleledger")
        post(sample_account.id, "100")

        # Simulate drift from an out-of-band write
        with temp_db._unit_of_work() as session:
            temp_db._apply_balance_delta(session, sample_account.id, Decimal("5"))
        assert account_service.get_account(sample_account.id).outstanding_balance == Decimal("105")

        balance = account_service.recalculate_balance(sample_account.id, performed_by=admin)

        assert balance == Decimal("100")
        assert account_service.get_account(sample_account.id).outstanding_balance == Decimal("100")
        assert "corrected by admin" in caplog.text
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_missing_account(self, account_service, admin):
        with pytest.raises(NotFoundError):
            account_service.recalculate_balance(42, performed_by=admin)
