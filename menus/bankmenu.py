import logging
import sys
from tabulate import tabulate

from flatbank.models.exceptions import (
    AuthenticationError,
    BankError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidPinError,
    RecordUpdateError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MAIN_MENU = '''
===== Simple Banking System =====
1. Create Account
2. Login to Account
3. Exit'''

ACCOUNT_MENU = '''
===== Account Menu =====
1. Deposit Funds
2. Withdraw Funds
3. Check Balance
4. View Transaction History
5. Logout'''


class BankMenu:
    def __init__(self, service, input_func=None, out=None):
        self.service = service
        self._input = input_func or input
        self._out = out if out is not None else sys.stdout

    def _say(self, msg):
        print(msg, file=self._out)

    def _ask(self, prompt):
        # EOFError ends the session
        print(prompt, end='', file=self._out)
        return self._input().strip()

    def _choice(self, prompt):
        raw = self._ask(prompt)
        try:
            return int(raw)
        except ValueError:
            return None

    def run(self):
        """Main loop. Returns the process exit code."""
        try:
            while True:
                self._say(MAIN_MENU)
                choice = self._choice('Enter your choice (1-3): ')
                if choice == 1:
                    self.create_account()
                elif choice == 2:
                    account = self.login()
                    if account is not None:
                        self.account_loop(account)
                elif choice == 3:
                    self._say('Exiting Banking System. Goodbye!')
                    return 0
                else:
                    self._say('Invalid choice. Please try again.')
        except EOFError:
            self._say('\nExiting Banking System. Goodbye!')
            return 0

    def create_account(self):
        name = self._ask('Enter your full name: ')
        if not name:
            self._say('Name cannot be empty. Account creation failed.')
            return
        pin = self._ask('Set a 4-digit PIN: ')
        initial = self._ask('Enter initial deposit amount: $')
        try:
            account = self.service.create_account(name, pin, initial)
        except InvalidPinError:
            self._say('Invalid PIN format. Account creation failed.')
        except ValidationError as err:
            self._say(str(err) + ' Account creation failed.')
        except BankError as err:
            logger.error('Account creation failed: %s', err)
            self._say(str(err) + ' Account creation failed.')
        else:
            self._say('Account created successfully!')
            self._say('Your Account Number: ' + account.account_no)

    def login(self):
        acc_no = self._ask('Enter your Account Number: ')
        if not acc_no:
            self._say('Account number cannot be empty.')
            return None
        pin = self._ask('Enter your PIN: ')
        try:
            account = self.service.login(acc_no, pin)
        except AuthenticationError as err:
            self._say(str(err))
            return None
        except BankError as err:
            logger.error('Login failed: %s', err)
            self._say(str(err))
            return None
        self._say('Login successful. Welcome, ' + account.name + '!')
        return account

    def account_loop(self, account):
        while True:
            self._say(ACCOUNT_MENU)
            choice = self._choice('Enter your choice (1-5): ')
            if choice == 1:
                self.deposit(account)
            elif choice == 2:
                self.withdraw(account)
            elif choice == 3:
                self._say('Current Balance: ${:.2f}'.format(self.service.get_balance(account)))
            elif choice == 4:
                self.history(account)
            elif choice == 5:
                self._say('Logged out successfully.')
                return
            else:
                self._say('Invalid choice. Please try again.')

    def deposit(self, account):
        amount = self._ask('Enter amount to deposit: $')
        try:
            txn = self.service.deposit(account, amount)
        except InvalidAmountError as err:
            self._say(str(err))
        except RecordUpdateError as err:
            self._say('Deposited ${:.2f} successfully.'.format(err.transaction.amount))
            self._say('Error updating account data.')
        except StorageError as err:
            logger.error('Deposit to %s not saved: %s', account.account_no, err)
            self._say('Error updating account data.')
        else:
            self._say('Deposited ${:.2f} successfully.'.format(txn.amount))

    def withdraw(self, account):
        amount = self._ask('Enter amount to withdraw: $')
        try:
            txn = self.service.withdraw(account, amount)
        except InvalidAmountError as err:
            self._say(str(err))
        except InsufficientBalanceError:
            self._say('Insufficient funds. Withdrawal failed.')
        except RecordUpdateError as err:
            self._say('Withdrew ${:.2f} successfully.'.format(err.transaction.amount))
            self._say('Error updating account data.')
        except StorageError as err:
            logger.error('Withdrawal from %s not saved: %s', account.account_no, err)
            self._say('Error updating account data.')
        else:
            self._say('Withdrew ${:.2f} successfully.'.format(txn.amount))

    def history(self, account):
        data = self.service.pull_transactions(account)
        if not data:
            self._say('No transactions found.')
            return
        header = ['Date', 'Type', 'Amount']
        rows = [[t.date, str(t.type), '${:.2f}'.format(t.amount)] for t in data]
        content = tabulate(rows, headers=header, stralign='right', disable_numparse=True)
        self._say('\n===== Transaction History =====')
        self._say(content)
