"""Wallet RPC commands: each builder returns a description of one call."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ParamType(Enum):
    """How a parameter value is to be interpreted by the node."""

    STRING = "string"
    BOOL = "bool"
    INTEGER = "integer"


@dataclass(frozen=True)
class Param:
    """One positional parameter of a wallet command, already rendered as text."""

    type: ParamType
    value: str


@dataclass(frozen=True)
class WalletCommand:
    """A wallet RPC call: method name, parameters and id decorations."""

    command: str
    params: tuple[Param, ...] = field(default_factory=tuple)
    prefix: str = ""
    postfix: str = ""

    def request_id(self) -> str:
        """Identifier under which the reply to this command is reported."""
        return f"id_{self.prefix}{self.command}{self.postfix}"


def _text(value: str) -> Param:
    return Param(ParamType.STRING, str(value))


def _flag(value: bool) -> Param:
    return Param(ParamType.BOOL, "1" if value else "0")


def _number(value: int) -> Param:
    return Param(ParamType.INTEGER, str(int(value)))


def _command(name: str, *params: Param, prefix: str = "", postfix: str = "") -> WalletCommand:
    return WalletCommand(name, tuple(params), prefix, postfix)


def create(name, password):
    return _command("wallet_create", _text(name), _text(password))


def get_info():
    return _command("wallet_get_info")


def close():
    return _command("wallet_close")


def open_wallet(name):
    return _command("wallet_open", _text(name))


def unlock(timeout, password):
    # The timeout travels as a string parameter.
    return _command("wallet_unlock", _text(str(int(timeout))), _text(password))


def import_private_key(wif_key, account_name, create_account, rescan_blockchain):
    return _command(
        "wallet_import_private_key",
        _text(wif_key),
        _text(account_name),
        _flag(create_account),
        _flag(rescan_blockchain),
    )


def import_register_private_key(wif_key, account_name, create_account, rescan_blockchain):
    return _command(
        "wallet_import_private_key",
        _text(wif_key),
        _text(account_name),
        _flag(create_account),
        _flag(rescan_blockchain),
        prefix="register_",
    )


def backup_create(path):
    return _command("wallet_backup_create", _text(path))


def backup_restore(path, name, password):
    return _command("wallet_backup_restore", _text(path), _text(name), _text(password))


def set_automatic_backups(enable):
    return _command("wallet_set_automatic_backups", _flag(enable))


def set_transaction_expiration_time(seconds):
    return _command("wallet_set_transaction_expiration_time", _number(seconds))


def account_transaction_history(account_name, asset_name):
    return _command("wallet_account_transaction_history", _text(account_name), _text(asset_name))


def transaction_history_split(user, asset_name, limit, trx_type):
    return _command(
        "wallet_transaction_history_splite",
        _text(user),
        _text(asset_name),
        _number(limit),
        _number(trx_type),
    )


def transaction_history_split_with_id(user, asset_name, limit, trx_type):
    return _command(
        "wallet_transaction_history_splite",
        _text(user),
        _text(asset_name),
        _number(limit),
        _number(trx_type),
        postfix=f"_{user}",
    )


def get_pending_transaction_errors(path):
    return _command("wallet_get_pending_transaction_errors", _text(path))


def change_passphrase(old_password, new_password):
    return _command("wallet_change_passphrase", _text(old_password), _text(new_password))


def check_passphrase(password):
    return _command("wallet_check_passphrase", _text(password))


def check_address(address):
    return _command("wallet_check_address", _text(address))


def account_create(account_name):
    return _command("wallet_account_create", _text(account_name))


def account_set_approval(account_name, approval):
    return _command("wallet_account_set_approval", _text(account_name), _number(approval))


def _transfer_params(amount, asset_symbol, from_account, to, memo, strategy):
    return tuple(_text(v) for v in (amount, asset_symbol, from_account, to, memo, strategy))


def transfer_to_address(amount, asset_symbol, from_account, to_address, memo, strategy):
    return _command(
        "wallet_transfer_to_address",
        *_transfer_params(amount, asset_symbol, from_account, to_address, memo, strategy),
    )


def transfer_to_address_with_id(trx_id, amount, asset_symbol, from_account, to_address, memo, strategy):
    return _command(
        "wallet_transfer_to_address",
        *_transfer_params(amount, asset_symbol, from_account, to_address, memo, strategy),
        postfix=f"_{trx_id}",
    )


def transfer_to_public_account(amount, asset_symbol, from_account, to_account, memo, strategy):
    return _command(
        "wallet_transfer_to_public_account",
        *_transfer_params(amount, asset_symbol, from_account, to_account, memo, strategy),
    )


def transfer_to_public_account_with_id(trx_id, amount, asset_symbol, from_account, to_account, memo, strategy):
    return _command(
        "wallet_transfer_to_public_account",
        *_transfer_params(amount, asset_symbol, from_account, to_account, memo, strategy),
        postfix=f"_{trx_id}",
    )


def rescan_blockchain():
    return _command("wallet_rescan_blockchain")


def cancel_scan():
    return _command("wallet_cancel_scan")


def get_transaction(transaction_id_prefix):
    return _command("wallet_get_transaction", _text(transaction_id_prefix))


def account_register(account_name, pay_from_account, public_data, delegate_pay_rate, account_type):
    return _command(
        "wallet_account_register",
        _text(account_name),
        _text(pay_from_account),
        _text(public_data),
        _number(delegate_pay_rate),
        _text(account_type),
    )


def list_accounts():
    return _command("wallet_list_accounts")


def list_unregistered_accounts():
    return _command("wallet_list_unregistered_accounts")


def list_my_addresses():
    return _command("wallet_list_my_addresses")


def list_my_accounts():
    return _command("wallet_list_my_accounts")


def get_account_public_address(account):
    return _command("wallet_get_account_public_address", _text(account))


def account_rename(current_name, new_name):
    return _command("wallet_account_rename", _text(current_name), _text(new_name))


def account_balance(account_name):
    return _command("wallet_account_balance", _text(account_name))


def account_balance_ids(account_name):
    return _command("wallet_account_balance_ids", _text(account_name))


def delegate_withdraw_pay(delegate_name, to_account_name, amount):
    return _command(
        "wallet_delegate_withdraw_pay",
        _text(delegate_name),
        _text(to_account_name),
        _text(amount),
    )


def delegate_pay_balance_query(account_name):
    return _command("wallet_delegate_pay_balance_query", _text(account_name))


def get_delegate_status(account_name):
    return _command("wallet_get_delegate_statue", _text(account_name))


def account_delete(account_name):
    return _command("wallet_account_delete", _text(account_name))


def set_transaction_fee(fee):
    return _command("wallet_set_transaction_fee", _text(fee))


def get_transaction_fee(asset_name):
    return _command("wallet_get_transaction_fee", _text(asset_name))


def set_transaction_scanning(enable):
    return _command("wallet_set_transaction_scanning", _flag(enable))


def dump_private_key(address):
    return _command("wallet_dump_private_key", _text(address))


def delegate_set_block_production(name, enable):
    return _command("wallet_delegate_set_block_production", _text(name), _flag(enable))


def dump_account_private_key(name, key_type):
    return _command("wallet_dump_account_private_key", _text(name), _number(key_type))


def account_update_registration(account_name, pay_from_account, public_data, delegate_pay_rate, account_type):
    return _command(
        "wallet_account_update_registration",
        _text(account_name),
        _text(pay_from_account),
        _text(public_data),
        _number(delegate_pay_rate),
        _text(account_type),
    )