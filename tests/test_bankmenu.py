"""Tests for the interactive menu."""

import io

import pytest

from flatbank.models.account import hash_pin
from flatbank.repositories.account_number_repo import AccountNumberRepository
from flatbank.repositories.account_repo import AccountRepository
from flatbank.repositories.transaction_repo import TransactionRepository
from flatbank.services.bank_service import BankService
from flatbank.storage.memory_storage import MemoryStorage
from menus.bankmenu import BankMenu


def scripted(*answers):
    """Feed answers to the menu, then signal end of input."""
    it = iter(answers)

    def _input():
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


@pytest.fixture
def accounts_store():
    return MemoryStorage()


@pytest.fixture
def ledger_store():
    return MemoryStorage()


@pytest.fixture
def bank_service(accounts_store, ledger_store):
    return BankService(
        account_repo=AccountRepository(accounts_store),
        transaction_repo=TransactionRepository(ledger_store),
        account_number_repo=AccountNumberRepository(MemoryStorage()),
    )


def run_menu(bank_service, *answers):
    out = io.StringIO()
    code = BankMenu(bank_service, input_func=scripted(*answers), out=out).run()
    return code, out.getvalue()


def test_exit(bank_service):
    """Exit returns 0."""
    code, output = run_menu(bank_service, '3')
    assert code == 0
    assert 'Exiting Banking System. Goodbye!' in output


def test_end_of_input_exits_cleanly(bank_service):
    """Running out of input ends the loop with 0."""
    code, output = run_menu(bank_service, '1', 'Alice')
    assert code == 0
    assert output.rstrip().endswith('Exiting Banking System. Goodbye!')


def test_invalid_choice(bank_service):
    """Non-numeric and out-of-range choices loop back."""
    code, output = run_menu(bank_service, 'abc', '7', '3')
    assert output.count('Invalid choice. Please try again.') == 2
    assert code == 0


def test_full_session(bank_service):
    """Create, fail an overdraft, deposit, withdraw, check and list."""
    code, output = run_menu(
        bank_service,
        '1', 'Alice', '1234', '100.00',
        '2', '1001', '1234',
        '2', '150.00',
        '3',
        '1', '50.00',
        '2', '30.00',
        '3',
        '4',
        '5',
        '3',
    )

    assert code == 0
    assert 'Account created successfully!' in output
    assert 'Your Account Number: 1001' in output
    assert 'Login successful. Welcome, Alice!' in output
    assert 'Insufficient funds. Withdrawal failed.' in output
    assert 'Current Balance: $100.00' in output
    assert 'Deposited $50.00 successfully.' in output
    assert 'Withdrew $30.00 successfully.' in output
    assert 'Current Balance: $120.00' in output
    assert 'Logged out successfully.' in output

    history = output.split('===== Transaction History =====')[1]
    positions = [history.index(s) for s in ('$100.00', '$50.00', '$30.00')]
    assert positions == sorted(positions)
    assert 'Withdrawal' in history


def test_create_account_validation_messages(bank_service, accounts_store):
    """Each bad input has its own message and creates nothing."""
    _, output = run_menu(
        bank_service,
        '1', '',
        '1', 'Alice', '12a4',
        '1', 'Alice', '1234', '-5',
        '3',
    )

    assert 'Name cannot be empty. Account creation failed.' in output
    assert 'Invalid PIN format. Account creation failed.' in output
    assert 'Initial deposit cannot be negative. Account creation failed.' in output
    assert accounts_store.lines is None


def test_login_failures(bank_service):
    """Wrong PIN and unknown account print the same message."""
    bank_service.create_account('Alice', '1234', '100')

    _, output = run_menu(
        bank_service,
        '2', '1001', '0000',
        '2', '4242', '1234',
        '2', '',
        '3',
    )

    assert output.count('Account not found or incorrect PIN.') == 2
    assert 'Account number cannot be empty.' in output
    assert 'Login successful' not in output


def test_invalid_amounts(bank_service):
    """Zero or text amounts are refused."""
    bank_service.create_account('Alice', '1234', '100')

    _, output = run_menu(
        bank_service,
        '2', '1001', '1234',
        '1', '0',
        '2', 'lots',
        '9',
        '5', '3',
    )

    assert output.count('Invalid amount. Please enter a positive value.') == 2
    assert 'Invalid choice. Please try again.' in output


def test_zero_opening_deposit_in_history(bank_service):
    """An account opened with zero lists its 0.00 opening Deposit."""
    bank_service.create_account('Bob', '1111', '0')

    _, output = run_menu(bank_service, '2', '1001', '1111', '4', '5', '3')

    history = output.split('===== Transaction History =====')[1]
    assert 'Deposit' in history
    assert '$0.00' in history
    assert 'No transactions found.' not in output


def test_storage_failure_reported(bank_service, ledger_store):
    """A failed write is reported and the session carries on."""
    bank_service.create_account('Alice', '1234', '100')
    ledger_store.fail_writes = True

    code, output = run_menu(bank_service, '2', '1001', '1234', '1', '50', '3', '5', '3')

    assert code == 0
    assert 'Error updating account data.' in output
    assert 'Current Balance: $100.00' in output


def test_record_failure_after_ledger_write(bank_service, accounts_store):
    """A logged deposit is announced before the record error."""
    bank_service.create_account('Alice', '1234', '100')
    account = bank_service.login('1001', '1234')
    accounts_store.fail_writes = True

    out = io.StringIO()
    menu = BankMenu(bank_service, input_func=scripted('50', '10'), out=out)
    menu.deposit(account)
    menu.withdraw(account)
    output = out.getvalue()

    deposited = output.index('Deposited $50.00 successfully.')
    withdrew = output.index('Withdrew $10.00 successfully.')
    first_error = output.index('Error updating account data.')
    last_error = output.rindex('Error updating account data.')
    assert output.count('Error updating account data.') == 2
    assert deposited < first_error < withdrew < last_error


def test_create_account_ledger_failure(bank_service, accounts_store, ledger_store):
    """A failed opening Deposit creates nothing and says so."""
    ledger_store.fail_writes = True

    _, output = run_menu(bank_service, '1', 'Alice', '1234', '100', '3')

    assert 'Account creation failed.' in output
    assert 'Account created successfully!' not in output
    assert accounts_store.lines is None


def test_no_transactions(bank_service, accounts_store):
    """A record with no ledger lines has an empty history."""
    accounts_store.lines = ['1001,Bob,0.00,' + str(hash_pin('1111'))]

    _, output = run_menu(bank_service, '2', '1001', '1111', '4', '5', '3')

    assert 'No transactions found.' in output
