"""Checks on the address name chosen when upgrading an account."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .constants import ADDRNAME_MAX_LENGTH

UPGRADE_MIN_BALANCE = 0.01


class NameStatus(Enum):
    """Outcome of the local checks on a proposed address name."""

    EMPTY = "empty"
    TOO_LONG = "too_long"
    EXISTS_IN_WALLET = "exists_in_wallet"
    NEEDS_CHAIN_CHECK = "needs_chain_check"

    @property
    def allows_upgrade(self) -> bool:
        """Whether the upgrade may go ahead as far as the local checks can tell."""
        return self is NameStatus.NEEDS_CHAIN_CHECK


def check_address_name(name, existing_names, current_name):
    """Check a proposed address name against the wallet.

    A name that passes every local check still has to be looked up on the
    chain, hence NEEDS_CHAIN_CHECK. Keeping the account's own current name is
    allowed even though the wallet already holds it.
    """
    if not name:
        return NameStatus.EMPTY
    if len(name) > ADDRNAME_MAX_LENGTH:
        return NameStatus.TOO_LONG
    names: Iterable[str] = existing_names
    if name != current_name and name in set(names):
        return NameStatus.EXISTS_IN_WALLET
    return NameStatus.NEEDS_CHAIN_CHECK


def _to_double(text: str) -> float:
    if "_" in text:
        return 0.0
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


def balance_allows_upgrade(balance_text):
    """Whether a balance such as ``"1,234.5 GOP"`` covers the upgrade fee.

    Only the part before the first space counts; thousands separators are
    ignored and unreadable text counts as zero.
    """
    amount = balance_text.split(" ", 1)[0].replace(",", "")
    return _to_double(amount) >= UPGRADE_MIN_BALANCE