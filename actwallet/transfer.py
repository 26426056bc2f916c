"""Checks applied to a transfer before it is handed to the node."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .constants import COMMON_ASSET

MEMO_MAX_BYTES = 40
PASSWORD_THRESHOLD = 1000.0
MIN_ACT_BALANCE = 0.1
ADDRESS_LINE_WIDTH = 60
_ZERO_EPSILON = 0.0000001
_BALANCE_SLACK = 0.000001
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_AMOUNT_TEXT = re.compile(r"(?:0|[1-9][0-9]{0,10})(?:\.\d{1,5})?|\t?")
_FEE_TEXT = re.compile(r"(?:0|[1-9][0-9]{0,5})(?:\.\d{1,2})?|\t?")
_RECIPIENT_TEXT = re.compile(r"[A-Za-z0-9\-. \n]+")
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")


class TransferError(ValueError):
    """A transfer was refused; the message is the one shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class TransferRequest:
    """A transfer that passed every local check."""

    recipient: str
    amount: str
    fee: str
    memo: str
    is_asset: bool = True

    @property
    def is_address_transfer(self) -> bool:
        """True when the recipient is an address rather than an account name."""
        return self.recipient.startswith(COMMON_ASSET)

    @property
    def requires_password(self) -> bool:
        """True when the amount is large enough to ask for the login password."""
        return needs_password(self.amount)


def _to_double(value) -> float:
    """Read a number the lenient way: anything unreadable counts as zero."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str) or "_" in value:
        return 0.0
    try:
        return float(value.strip())
    except ValueError:
        return 0.0


def _to_int(text: str) -> int:
    stripped = text.strip()
    if not _INTEGER_TEXT.fullmatch(stripped):
        return 0
    number = int(stripped)
    if number < _INT32_MIN or number > _INT32_MAX:
        return 0
    return number


def _is_zero(value: float) -> bool:
    return -_ZERO_EPSILON < value < _ZERO_EPSILON


def is_valid_amount_text(text):
    """Whether ``text`` is an acceptable amount entry (up to 11 digits and 5 decimals)."""
    return _AMOUNT_TEXT.fullmatch(text) is not None


def is_valid_fee_text(text):
    """Whether ``text`` is an acceptable fee entry (up to 6 digits and 2 decimals)."""
    return _FEE_TEXT.fullmatch(text) is not None


def is_valid_recipient_text(text):
    """Whether ``text`` may name a recipient.

    It must be non-empty, use only letters, digits, '-', '.', spaces and line
    ends, and, unless it is an address, must not be a non-zero number.
    """
    if not text or _RECIPIENT_TEXT.fullmatch(text) is None:
        return False
    if text.startswith(COMMON_ASSET):
        return True
    return _to_int(text) == 0


def clean_recipient(text):
    """Drop all whitespace from a recipient that contains spaces or line ends."""
    if " " in text or "\n" in text:
        return "".join(text.split())
    return text


def memo_too_long(memo):
    """Whether the memo is over the byte limit once encoded as UTF-8."""
    return len(memo.encode("utf-8")) > MEMO_MAX_BYTES


def normalize_memo(memo, is_asset):
    """Prepare a memo for sending.

    Token transfers pack their arguments with '|', so it is replaced by '+'.
    An empty memo becomes a single space so the node adds none of its own.
    """
    if not is_asset:
        memo = memo.replace("|", "+")
    return memo or " "


def has_insufficient_funds(amount, fee, balance, currency_name, is_asset):
    """Whether ``amount`` (plus the fee, for the common asset) exceeds ``balance``."""
    amount_value = _to_double(amount)
    if not is_asset:
        return amount_value > _to_double(balance)
    balance_text = balance.replace(",", "") if isinstance(balance, str) else balance
    balance_value = _to_double(balance_text)
    if currency_name == COMMON_ASSET and amount_value + _to_double(fee) > balance_value + _BALANCE_SLACK:
        return True
    return amount_value > balance_value


def validate_transfer(recipient, amount, fee, memo, act_balance, is_asset):
    """Run the checks made before a transfer is confirmed.

    Returns the request with its memo normalised; raises TransferError with the
    user-facing message at the first check that fails.
    """
    if not recipient:
        raise TransferError("Input Address.")
    if not amount:
        raise TransferError("Please enter the amount.")
    if _is_zero(_to_double(amount)):
        raise TransferError("The amount can not be 0")
    if _is_zero(_to_double(fee)):
        raise TransferError("The fee can not be 0")
    if _to_double(act_balance) < MIN_ACT_BALANCE:
        raise TransferError("The ACT amount must be greater than 0.1 .")
    prepared = normalize_memo(memo, is_asset)
    if memo_too_long(prepared):
        raise TransferError("Message length more than 40 bytes!")
    return TransferRequest(recipient, amount, fee, prepared, is_asset)


def needs_password(amount):
    """Whether confirming this amount requires the login password."""
    return _to_double(amount) >= PASSWORD_THRESHOLD


def check_passphrase_reply(reply):
    """Interpret the node's reply to a passphrase check.

    Returns True for a correct password and False for a wrong one; raises
    TransferError when the password is too short and ValueError for any other
    reply.
    """
    if reply[:4] == "true":
        return True
    if reply[:5] == "false":
        return False
    if reply[:5] == "20015":
        raise TransferError("At least 8 letters!")
    raise ValueError(f"unexpected passphrase check reply: {reply!r}")


def split_address_for_display(address):
    """Break a long address onto two lines after its 60th character."""
    if len(address) >= ADDRESS_LINE_WIDTH:
        return address[:ADDRESS_LINE_WIDTH] + "\r\n" + address[ADDRESS_LINE_WIDTH:]
    return address