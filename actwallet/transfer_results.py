"""Interpretation of the node's replies to address checks and transfers."""

from __future__ import annotations

from dataclasses import dataclass

SUBMITTED_PREFIX = '"result":{"index":'
SUBMITTED_MESSAGE = "The transfer request has been submitted."
WRONG_ADDRESS_MESSAGE = "Wrong address!"
FAILED_MESSAGE = "Transaction sent failed"
RENAME_NEEDED_MESSAGE = "This name has been registered, please rename this account!"

_ENTRY_ID_KEY = '"entry_id"'
_ENTRY_ID_OFFSET = 12
_ENTRY_ID_LENGTH = 40
_MESSAGE_KEY = '"message":"'
_INVALID_FROM_ACCOUNT = (
    '"format":"my->is_receive_account( from_account_name ): Invalid account name",'
)
_TRANSFER_ID_PREFIXES = (
    "id_wallet_transfer_to_address_",
    "id_wallet_transfer_to_public_account_",
)

_ERROR_MESSAGES = {
    "imessage size bigger than soft_max_lenth": "Message too long!",
    "invalid transaction expiration": "Failed: You need to wait for synchronization to complete",
    "insufficient funds": "Not enough ACTs!",
    "Out of Range": WRONG_ADDRESS_MESSAGE,
    "Parse Error": WRONG_ADDRESS_MESSAGE,
}


@dataclass(frozen=True)
class TransferOutcome:
    """What became of a transfer request.

    ``message`` is the text shown to the user; ``error`` is the node's own
    error message for a failed transfer and ``entry_id`` the ledger entry of
    a submitted one.
    """

    submitted: bool
    message: str
    entry_id: str = ""
    error: str = ""


def check_address_result(result):
    """Whether the node accepted the address, judging by the text after the first colon."""
    return result[result.find(":") + 1 :] == "true"


def _is_submitted(result: str) -> bool:
    return result.startswith(SUBMITTED_PREFIX)


def _entry_id(result: str) -> str:
    start = result.find(_ENTRY_ID_KEY) + _ENTRY_ID_OFFSET
    return result[start : start + _ENTRY_ID_LENGTH]


def _node_error(result: str) -> str:
    start = result.find(_MESSAGE_KEY) + len(_MESSAGE_KEY)
    end = result.find('"', start)
    return result[start:] if end < 0 else result[start:end]


def transfer_error_message(result):
    """The user-facing message for a failed transfer reply."""
    error = _node_error(result)
    if error == "Assert Exception":
        if _INVALID_FROM_ACCOUNT in result:
            return RENAME_NEEDED_MESSAGE
        return WRONG_ADDRESS_MESSAGE
    return _ERROR_MESSAGES.get(error, FAILED_MESSAGE)


def parse_transfer_result(result):
    """Turn the node's reply to a transfer into a TransferOutcome."""
    if _is_submitted(result):
        return TransferOutcome(True, SUBMITTED_MESSAGE, entry_id=_entry_id(result))
    return TransferOutcome(False, transfer_error_message(result), error=_node_error(result))


def matches_transfer_id(request_id, account_name):
    """Whether ``request_id`` is the id of a transfer sent from ``account_name``."""
    return any(request_id == prefix + account_name for prefix in _TRANSFER_ID_PREFIXES)