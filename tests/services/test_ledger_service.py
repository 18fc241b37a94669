"""
Tests for the LedgerService storage contract.
"""

from decimal import Decimal

import pytest

from mini_ledger.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    BalanceConflictError,
    InsufficientFundsError,
)
from mini_ledger.services.ledger_service import (
    ACCOUNT_ID_ALPHABET,
    LedgerService,
    generate_account_id,
)


def make_account(store, username="alice", email="alice@test.com"):
    with store.session_scope() as db:
        return LedgerService(db).create_account(
            username=username, password_hash="not-a-real-hash", email=email,
        )


# --- Account Tests ---

class TestCreateAccount:

    def test_new_account_has_zero_balance(self, store):
        account = make_account(store)

        assert account.balance == Decimal("0.00")
        assert account.version == 0
        assert account.created_at is not None

    def test_account_id_is_six_alphanumerics(self, store):
        account = make_account(store)

        assert len(account.account_id) == 6
        assert all(c in ACCOUNT_ID_ALPHABET for c in account.account_id)

    def test_generated_ids_differ(self):
        ids = {generate_account_id() for _ in range(50)}
        assert len(ids) > 1

    def test_duplicate_email_rejected(self, store):
        make_account(store)

        with pytest.raises(AccountExistsError, match="Account already exists"):
            make_account(store, username="other")

    def test_duplicate_username_rejected(self, store):
        make_account(store)

        with pytest.raises(AccountExistsError):
            make_account(store, email="other@test.com")

    def test_lookup_by_username_and_email(self, store):
        account = make_account(store)

        with store.session_scope() as db:
            ledger = LedgerService(db)
            assert ledger.get_account(account.account_id).username == "alice"
            assert ledger.get_account_by_username("alice").account_id == account.account_id
            assert ledger.get_account_by_email("alice@test.com").account_id == account.account_id
            assert ledger.get_account("nope00") is None
            assert ledger.get_account_by_username("nobody") is None


# --- Balance Write Tests ---

class TestSetBalance:

    def test_set_balance_bumps_version(self, store):
        account = make_account(store)

        with store.session_scope() as db:
            updated = LedgerService(db).set_balance(
                account.account_id, Decimal("25.50"), expected_version=0,
            )

        assert updated.balance == Decimal("25.50")
        assert updated.version == 1

    def test_stale_version_raises_conflict(self, store):
        account = make_account(store)
        with store.session_scope() as db:
            LedgerService(db).set_balance(
                account.account_id, Decimal("10.00"), expected_version=0,
            )

        with pytest.raises(BalanceConflictError):
            with store.session_scope() as db:
                LedgerService(db).set_balance(
                    account.account_id, Decimal("99.00"), expected_version=0,
                )

        with store.session_scope() as db:
            assert LedgerService(db).get_account(account.account_id).balance == Decimal("10.00")

    def test_missing_account_raises_not_found(self, store):
        with pytest.raises(AccountNotFoundError):
            with store.session_scope() as db:
                LedgerService(db).set_balance("nope00", Decimal("1.00"))

    def test_negative_balance_refused(self, store):
        account = make_account(store)

        with pytest.raises(InsufficientFundsError):
            with store.session_scope() as db:
                LedgerService(db).set_balance(account.account_id, Decimal("-0.01"))


# --- Log Tests ---

class TestTransactionLogs:

    def test_lists_are_empty_for_new_account(self, store):
        account = make_account(store)

        with store.session_scope() as db:
            ledger = LedgerService(db)
            assert ledger.list_fundings_for(account.account_id) == []
            assert ledger.list_withdrawals_for(account.account_id) == []
            assert ledger.list_transfers_from(account.account_id) == []

    def test_fundings_listed_in_insertion_order(self, store):
        account = make_account(store)

        with store.session_scope() as db:
            ledger = LedgerService(db)
            for amount in ("5.00", "1.00", "3.00"):
                ledger.append_funding(account.account_id, Decimal(amount))

        with store.session_scope() as db:
            fundings = LedgerService(db).list_fundings_for(account.account_id)

        assert [f.amount for f in fundings] == [
            Decimal("5.00"), Decimal("1.00"), Decimal("3.00"),
        ]
        assert len({f.funding_id for f in fundings}) == 3

    def test_withdrawals_are_scoped_to_account(self, store):
        alice = make_account(store)
        bob = make_account(store, username="bob", email="bob@test.com")

        with store.session_scope() as db:
            ledger = LedgerService(db)
            ledger.append_withdrawal(alice.account_id, Decimal("2.00"))
            ledger.append_withdrawal(bob.account_id, Decimal("7.00"))

        with store.session_scope() as db:
            withdrawals = LedgerService(db).list_withdrawals_for(alice.account_id)

        assert [w.amount for w in withdrawals] == [Decimal("2.00")]

    def test_repeat_transfer_overwrites_pair_record(self, store):
        alice = make_account(store)
        bob = make_account(store, username="bob", email="bob@test.com")

        with store.session_scope() as db:
            first = LedgerService(db).append_transfer(
                alice.account_id, bob.account_id, Decimal("10.00"),
            )
        with store.session_scope() as db:
            second = LedgerService(db).append_transfer(
                alice.account_id, bob.account_id, Decimal("40.00"),
            )

        assert first.transfer_id == second.transfer_id == f"{alice.account_id}-{bob.account_id}"
        assert second.created_at >= first.created_at

        with store.session_scope() as db:
            transfers = LedgerService(db).list_transfers_from(alice.account_id)

        assert len(transfers) == 1
        assert transfers[0].amount == Decimal("40.00")

    def test_reverse_pair_is_a_separate_record(self, store):
        alice = make_account(store)
        bob = make_account(store, username="bob", email="bob@test.com")

        with store.session_scope() as db:
            ledger = LedgerService(db)
            ledger.append_transfer(alice.account_id, bob.account_id, Decimal("1.00"))
            ledger.append_transfer(bob.account_id, alice.account_id, Decimal("2.00"))

        with store.session_scope() as db:
            ledger = LedgerService(db)
            assert len(ledger.list_transfers_from(alice.account_id)) == 1
            assert ledger.list_transfers_from(bob.account_id)[0].transfer_id == (
                f"{bob.account_id}-{alice.account_id}"
            )
