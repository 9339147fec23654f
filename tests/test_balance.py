"""Tests for account balance computation."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from ledgerdesk.domain.balance import (
    DECREASING_KINDS,
    INCREASING_KINDS,
    TransactionClass,
    TransactionKind,
    classify_transaction_type,
    signed_effect,
    transaction_sign,
    unknown_type_sign,
)
from ledgerdesk.domain.entities import Transaction
from ledgerdesk.domain.errors import ValidationError


def _txn(**kwargs) -> Transaction:
    fields = dict(
        id="t1",
        account_id="a1",
        date=None,
        amount=None,
        type=None,
        debit=None,
        credit=None,
        description=None,
        created_at=None,
    )
    fields.update(kwargs)
    return Transaction(**fields)


class TestClassification:
    """Tests for transaction type classification and signs."""

    @pytest.mark.parametrize("raw_type", ["expense", "transfer_out", "purchase_payment", "deposit_out"])
    def test_decreasing_types(self, raw_type):
        assert transaction_sign(classify_transaction_type(raw_type)) == -1

    @pytest.mark.parametrize(
        "raw_type", ["income", "transfer_in", "deposit", "sale", "purchase_return"]
    )
    def test_increasing_types(self, raw_type):
        assert transaction_sign(classify_transaction_type(raw_type)) == 1

    def test_known_kind_sets_are_disjoint(self):
        assert not DECREASING_KINDS & INCREASING_KINDS
        assert TransactionKind.UNKNOWN not in DECREASING_KINDS | INCREASING_KINDS

    def test_unrecognised_type_keeps_raw_tag(self):
        result = classify_transaction_type("office_expense")
        assert result == TransactionClass(TransactionKind.UNKNOWN, "office_expense")

    def test_literal_unknown_tag(self):
        result = classify_transaction_type("unknown")
        assert result.kind is TransactionKind.UNKNOWN
        assert transaction_sign(result) == 1

    def test_matching_is_case_sensitive(self):
        assert classify_transaction_type("Income").kind is TransactionKind.UNKNOWN

    @pytest.mark.parametrize(
        "raw_type,expected",
        [
            ("office_expense", -1),
            ("loan_payment", -1),
            ("refund", 1),
            ("misc", 1),
            ("", 1),
            (None, 1),
        ],
    )
    def test_unknown_type_sign(self, raw_type, expected):
        assert unknown_type_sign(raw_type) == expected


class TestSignedEffect:
    """Tests for the signed effect of a single transaction."""

    def test_debit_credit_wins_over_type(self):
        txn = _txn(debit=Decimal("50"), credit=Decimal("20"), type="income", amount=Decimal("999"))
        assert signed_effect(txn) == Decimal("-30")

    def test_credit_increases(self):
        assert signed_effect(_txn(debit=Decimal("0"), credit=Decimal("75"))) == Decimal("75")

    def test_typed_amount(self):
        assert signed_effect(_txn(amount=Decimal("200"), type="expense")) == Decimal("-200")
        assert signed_effect(_txn(amount=Decimal("200"), type="deposit")) == Decimal("200")

    def test_only_debit_falls_back_to_type(self):
        txn = _txn(debit=Decimal("10"), amount=Decimal("40"), type="sale")
        assert signed_effect(txn) == Decimal("40")

    def test_missing_amount_is_zero(self):
        assert signed_effect(_txn(type="income")) == Decimal("0")


class TestBalanceService:
    """Tests for BalanceService against a real store."""

    def test_opening_transactions_and_sales(
        self, balance_service, transaction_service, sale_service, sample_account
    ):
        transaction_service.create_transaction(
            sample_account.id, amount=Decimal("200"), type="income"
        )
        transaction_service.create_transaction(
            sample_account.id, debit=Decimal("50"), credit=Decimal("0")
        )
        sale_service.create_sale(sample_account.id, Decimal("300"))

        result = balance_service.calculate_balance(sample_account.id)

        assert result.ok
        assert result.opening_balance == Decimal("1000")
        assert result.transactions_total == Decimal("150")
        assert result.sales_total == Decimal("300")
        assert result.value == Decimal("1450")
        assert balance_service.get_calculated_account_balance(sample_account.id) == Decimal("1450")

    def test_expense_and_legacy_sale(
        self, balance_service, transaction_service, sale_service, sample_account
    ):
        transaction_service.create_transaction(
            sample_account.id, amount=Decimal("200"), type="expense"
        )
        sale_service.create_sale(sample_account.id, Decimal("100"), legacy_field=True)

        result = balance_service.calculate_balance(sample_account.id)

        assert result.transactions_total == Decimal("-200")
        assert result.sales_total == Decimal("100")
        assert result.value == Decimal("900")

    def test_no_activity_gives_opening_balance(self, balance_service, sample_account):
        assert balance_service.calculate_balance(sample_account.id).value == Decimal("1000")

    def test_negative_opening_balance(self, balance_service, account_service):
        account_id = account_service.create_account("Overdraft", opening_balance=Decimal("-250"))
        assert balance_service.calculate_balance(account_id).value == Decimal("-250")

    def test_missing_account_counts_opening_as_zero(self, balance_service, temp_db):
        result = balance_service.calculate_balance("no-such-account")
        assert result.ok
        assert result.value == Decimal("0")

    def test_other_accounts_do_not_contribute(
        self, balance_service, account_service, transaction_service, sample_account
    ):
        other_id = account_service.create_account("Other")
        transaction_service.create_transaction(other_id, amount=Decimal("80"), type="income")

        assert balance_service.calculate_balance(sample_account.id).value == Decimal("1000")

    def test_sale_with_both_fields_counted_twice_by_default(
        self, balance_service, temp_db, sample_account
    ):
        sale_id = temp_db.create_sale(
            payment_amount=Decimal("300"),
            payment_account_id=sample_account.id,
            payment_account=sample_account.id,
        )

        result = balance_service.calculate_balance(sample_account.id)

        assert result.sales_total == Decimal("600")
        assert result.counted_sale_ids == (sale_id, sale_id)
        assert result.value == Decimal("1600")

    def test_dedupe_counts_sale_once(self, balance_service, temp_db, sample_account):
        sale_id = temp_db.create_sale(
            payment_amount=Decimal("300"),
            payment_account_id=sample_account.id,
            payment_account=sample_account.id,
        )

        result = balance_service.calculate_balance(sample_account.id, dedupe_sales=True)

        assert result.sales_total == Decimal("300")
        assert result.counted_sale_ids == (sale_id,)
        assert result.value == Decimal("1300")

    def test_store_failure_gives_zero(self, balance_service, temp_db, sample_account, monkeypatch, caplog):
        def fail(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("db gone"))

        monkeypatch.setattr(temp_db, "list_transactions", fail)

        result = balance_service.calculate_balance(sample_account.id)

        assert not result.ok
        assert result.error is not None
        assert result.value_or_zero() == Decimal("0")
        assert balance_service.get_calculated_account_balance(sample_account.id) == Decimal("0")
        assert "Error calculating account balance" in caplog.text

    def test_empty_account_id_rejected(self, balance_service):
        with pytest.raises(ValidationError):
            balance_service.calculate_balance("")
