"""
Tests for the AccountService: signup and authentication.
"""

import pytest

from mini_ledger.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    InvalidInputError,
    UnauthorizedError,
)
from mini_ledger.services.ledger_service import LedgerService


class TestCreateAccount:

    def test_create_account_succeeds(self, account_service):
        view = account_service.create_account("alice", "p", "a@x.com")

        assert view.username == "alice"
        assert view.email == "a@x.com"
        assert view.account_balance == "0.00"
        assert len(view.account_id) == 6

    def test_view_excludes_password(self, account_service):
        view = account_service.create_account("alice", "p", "a@x.com")

        dumped = view.model_dump(by_alias=True)
        assert set(dumped) == {"accountId", "username", "email", "accountBalance"}

    def test_password_stored_as_salted_hash(self, account_service, store):
        first = account_service.create_account("alice", "secret", "a@x.com")
        second = account_service.create_account("bob", "secret", "b@x.com")

        with store.session_scope() as db:
            ledger = LedgerService(db)
            hash_a = ledger.get_account(first.account_id).password_hash
            hash_b = ledger.get_account(second.account_id).password_hash

        assert hash_a != "secret"
        assert hash_a.startswith("$2")
        assert hash_a != hash_b

    @pytest.mark.parametrize("username,password,email", [
        ("", "p", "a@x.com"),
        ("alice", "", "a@x.com"),
        ("alice", "p", ""),
        (None, None, None),
    ])
    def test_missing_field_rejected(self, account_service, username, password, email):
        with pytest.raises(InvalidInputError, match="username, password and email are required"):
            account_service.create_account(username, password, email)

    def test_duplicate_email_rejected(self, account_service):
        account_service.create_account("alice", "p", "a@x.com")

        with pytest.raises(AccountExistsError, match="Account already exists"):
            account_service.create_account("alice2", "p", "a@x.com")

    def test_overlong_password_rejected(self, account_service):
        with pytest.raises(InvalidInputError, match="at most 72 bytes"):
            account_service.create_account("alice", "x" * 73, "a@x.com")


class TestGetAccount:

    def test_get_account_by_id(self, account_service):
        created = account_service.create_account("alice", "p", "a@x.com")

        assert account_service.get_account(created.account_id) == created

    def test_unknown_id_not_found(self, account_service):
        with pytest.raises(AccountNotFoundError, match="Account not found"):
            account_service.get_account("nope00")


class TestAuthenticate:

    def test_correct_password_returns_account(self, account_service):
        view = account_service.create_account("alice", "p", "a@x.com")

        account = account_service.authenticate("alice", "p")
        assert account.account_id == view.account_id

    def test_wrong_password_rejected(self, account_service):
        account_service.create_account("alice", "p", "a@x.com")

        with pytest.raises(UnauthorizedError, match="Invalid password"):
            account_service.authenticate("alice", "wrong")

    def test_unknown_username_not_found(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.authenticate("ghost", "p")

    def test_missing_credentials_rejected(self, account_service):
        with pytest.raises(InvalidInputError, match="username and password are required"):
            account_service.authenticate("alice", "")
