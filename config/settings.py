"""Configuration management for FlatBank."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path


_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


@dataclass
class Settings:
    """Configuration settings for FlatBank.

    File names are resolved against ``data_dir``; the defaults reproduce the
    legacy layout of three text files in the working directory.
    """

    # Storage Configuration
    data_dir: str = '.'
    accounts_file: str = 'accounts.txt'
    transactions_file: str = 'transactions.txt'
    account_number_file: str = 'account_number.txt'
    backup_dir: str = 'backup'
    strict_decoding: bool = False

    # Logging Configuration
    log_file: str = 'flatbank.log'
    log_level: str = 'INFO'

    # Business Rules
    first_account_number: int = 1000  # first issued number is this + 1
    max_amount: int = 1_000_000_000_000  # 1T

    @property
    def accounts_path(self) -> Path:
        return Path(self.data_dir) / self.accounts_file

    @property
    def transactions_path(self) -> Path:
        return Path(self.data_dir) / self.transactions_file

    @property
    def account_number_path(self) -> Path:
        return Path(self.data_dir) / self.account_number_file

    @property
    def data_paths(self) -> list:
        return [self.accounts_path, self.transactions_path, self.account_number_path]

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables.

        Unset variables keep their defaults.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        defaults = cls()

        log_level = os.getenv('FLATBANK_LOG_LEVEL', defaults.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"FLATBANK_LOG_LEVEL must be a logging level name, got {log_level!r}")

        strict = os.getenv('FLATBANK_STRICT_DECODING', '').strip().lower()
        if strict in _TRUE_VALUES:
            strict_decoding = True
        elif strict in _FALSE_VALUES:
            strict_decoding = False
        else:
            raise ValueError(f"FLATBANK_STRICT_DECODING must be a boolean, got {strict!r}")

        first_number = os.getenv('FLATBANK_FIRST_ACCOUNT_NUMBER')
        if first_number is None:
            first_account_number = defaults.first_account_number
        else:
            try:
                first_account_number = int(first_number)
            except ValueError:
                raise ValueError(
                    f"FLATBANK_FIRST_ACCOUNT_NUMBER must be an integer, got {first_number!r}"
                )

        return cls(
            data_dir=os.getenv('FLATBANK_DATA_DIR', defaults.data_dir),
            accounts_file=os.getenv('FLATBANK_ACCOUNTS_FILE', defaults.accounts_file),
            transactions_file=os.getenv('FLATBANK_TRANSACTIONS_FILE', defaults.transactions_file),
            account_number_file=os.getenv(
                'FLATBANK_ACCOUNT_NUMBER_FILE', defaults.account_number_file
            ),
            backup_dir=os.getenv('FLATBANK_BACKUP_DIR', defaults.backup_dir),
            strict_decoding=strict_decoding,
            log_file=os.getenv('FLATBANK_LOG_FILE', defaults.log_file),
            log_level=log_level,
            first_account_number=first_account_number,
        )
