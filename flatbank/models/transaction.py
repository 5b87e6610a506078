"""Transaction data model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TransactionType(str, Enum):
    """Kinds of ledger entries, valued by their stored text."""

    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Transaction:
    """Represents a single ledger entry."""

    account_no: str
    type: str
    amount: Decimal
    date: str

    @classmethod
    def create(
        cls,
        account_no: str,
        type: TransactionType,
        amount: Decimal,
        now: datetime | None = None,
    ) -> "Transaction":
        """
        Create a transaction stamped with the local time.

        Args:
            account_no: The account the entry belongs to
            type: Deposit or Withdrawal
            amount: The transaction amount
            now: Timestamp override, defaults to the current local time

        Returns:
            A new Transaction with a second-precision date string
        """
        when = now if now is not None else datetime.now()
        return cls(
            account_no=account_no,
            type=type,
            amount=amount,
            date=when.strftime(DATE_FORMAT),
        )

    @property
    def timestamp(self) -> datetime | None:
        """The date parsed back to a datetime, or None if it is malformed."""
        try:
            return datetime.strptime(self.date, DATE_FORMAT)
        except ValueError:
            return None
