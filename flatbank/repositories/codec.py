"""Encoding and decoding of comma-delimited store lines."""

import logging
from decimal import Decimal
from enum import Enum

from flatbank.models.account import AccountRecord
from flatbank.models.exceptions import RecordDecodeError
from flatbank.models.money import ZERO, format_money, to_money
from flatbank.models.transaction import Transaction, TransactionType

logger = logging.getLogger(__name__)

DELIMITER = ","
KNOWN_TYPES = frozenset(t.value for t in TransactionType)


class DecodePolicy(str, Enum):
    """What a repository does with a field that fails to decode."""

    STRICT = "strict"
    ZERO_FALLBACK = "zero_fallback"


def leading_field(line: str) -> str:
    """Return the text before the first delimiter (the account number)."""
    return line.split(DELIMITER, 1)[0]


def split_fields(line: str, count: int) -> list[str]:
    """Split a line into exactly ``count`` fields, padding missing ones with ''."""
    fields = line.split(DELIMITER)
    fields = fields[:count]
    fields.extend([""] * (count - len(fields)))
    return fields


def decode_amount(raw: str, field: str = "amount") -> Decimal:
    try:
        return to_money(raw)
    except ValueError as err:
        raise RecordDecodeError(f"Malformed {field}: {raw!r}", field=field, raw=raw) from err


def decode_pin_hash(raw: str) -> int:
    text = raw.strip()
    if not text.isdigit():
        raise RecordDecodeError(f"Malformed pin_hash: {raw!r}", field="pin_hash", raw=raw)
    return int(text)


def encode_account(record: AccountRecord) -> str:
    return DELIMITER.join(
        [record.account_no, record.name, format_money(record.balance), str(record.pin_hash)]
    )


def encode_transaction(txn: Transaction) -> str:
    return DELIMITER.join([txn.account_no, str(txn.type), format_money(txn.amount), txn.date])


def decode_account(line: str, policy: DecodePolicy = DecodePolicy.STRICT) -> AccountRecord:
    """
    Decode an account line.

    Args:
        line: ``account_no,name,balance,pin_hash``
        policy: STRICT propagates decode errors, ZERO_FALLBACK substitutes zero

    Raises:
        RecordDecodeError: Under STRICT, if balance or pin_hash is malformed
    """
    account_no, name, balance_raw, pin_raw = split_fields(line, 4)
    balance = _with_policy(
        lambda: decode_amount(balance_raw, "balance"), ZERO, policy, account_no
    )
    pin_hash = _with_policy(lambda: decode_pin_hash(pin_raw), 0, policy, account_no)
    return AccountRecord(account_no=account_no, name=name, balance=balance, pin_hash=pin_hash)


def decode_transaction(line: str, policy: DecodePolicy = DecodePolicy.STRICT) -> Transaction:
    """
    Decode a ledger line.

    Args:
        line: ``account_no,type,amount,date``
        policy: STRICT propagates decode errors, ZERO_FALLBACK substitutes zero

    Raises:
        RecordDecodeError: Under STRICT, if amount is malformed
    """
    account_no, type, amount_raw, date = split_fields(line, 4)
    if type in KNOWN_TYPES:
        type = TransactionType(type)
    amount = _with_policy(lambda: decode_amount(amount_raw), ZERO, policy, account_no)
    return Transaction(account_no=account_no, type=type, amount=amount, date=date)


def _with_policy(decode, fallback, policy: DecodePolicy, account_no: str):
    try:
        return decode()
    except RecordDecodeError as err:
        if policy is DecodePolicy.STRICT:
            raise
        logger.warning("Account %s: %s, substituting %s", account_no, err, fallback)
        return fallback
