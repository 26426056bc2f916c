"""Shared wallet constants: user-facing messages, limits, result codes and sandbox command names."""

from __future__ import annotations

from types import MappingProxyType

# Messages shown while upgrading an address name.
STR_ADDRNAME_IS_REGISTERED = "该地址名已被注册"
STR_ADDRNAME_IS_EXIST = "钱包里已经存在这个地址名"
STR_ADDRNAME_IS_TOO_LONG = "地址名太长，请输入63位以内的地址名"
STR_ADDRNAME_MUST_BEGIN_BY_LOWER = "首字符(包括以'.'分隔的单词的首字符)必须是小写字母"
STR_ADDRNAME_MUST_END_BY_LOWER_OR_NUM = "尾字符必须是小写字母或者数字"
STR_ADDRNAME_HAVE_UPPER_OR_INVALID = "地址名包含了大写字母或者特殊字符"
STR_ADDRNAME_IS_VALID = "该账户可用"
STR_NEED_TRANSFER_FROM_OFFICIAL = ""
STR_TRANSFER_TO_PAY = "转账支付"
STR_ADDRNAME_INFO = "只允许小写字母，点和横杠。必须为小写字母开头，结尾不能为横杠"
STR_ADDRUPDATE_PAY_INFO = "需支付0.01GOP进行升级"
STR_ADDRUPDATE_SUBMITED = "升级申请已提交"
STR_CONFIRM = "确认"

# Messages shown while applying to become a delegate.
STR_APPLY_DELEGATE_PAY_INFO = "申请成为代理所需费用：1221.83 GOP"
STR_APPLY_DELETE = "申请代理："
STR_NEXT = "下一步"
STR_PAY = "支付"

# Limits.
GOP_BLOCKCHAIN_NAME_MAX_SIZE = 63
BLOCKCHAIN_TRANSFER_MIN_FEE = 0.01
BLOCKCHAIN_ADDRESS_LENGTH = 68
BLOCKCHAIN_GET_ACCOUNT_RES_LENGTH = 16
BLOCKCHAIN_RENAME_RES_LENGTH = 2
RES_CODE_LENGTH = 5
ADDRNAME_MAX_LENGTH = 63
ADDRNAME_MIN_LENGTH = 1

# Result codes reported by the node.
RES_CODE_UNKNOWN_WALLET_ACCOUNT = "20006"
RES_CODE_UNKNOWN_BLOCK_CHAIN_ACCOUNT = "No account found"
RES_CODE_UNAUTHORIZED_CHILD_ACCOUNT = "20039"

# The chain's native asset; balances and fees are kept in it.
COMMON_ASSET = "ACT"

SANDBOX_COMMANDS = MappingProxyType(
    {
        "open": "sandbox_open",
        "close": "sandbox_close",
        "register_contract": "sandbox_register_contract",
        "call_contract": "sandbox_call_contract",
        "upgrade_contract": "sandbox_upgrade_contract",
        "upgrade_contract_testing": "sandbox_upgrade_contract_testing",
        "destroy_contract": "sandbox_destroy_contract",
        "destroy_contract_testing": "sandbox_destroy_contract_testing",
        "wallet_transfer_to_contract": "sandbox_transfer_to_contract",
        "get_contract_info": "sandbox_get_contract_info",
        "get_contract_balance": "sandbox_get_contract_balance",
        "wallet_account_balance": "sandbox_account_balance",
        "register_contract_testing": "sandbox_register_contract_testing",
        "call_contract_testing": "sandbox_call_contract_testing",
        "wallet_transfer_to_contract_testing": "sandbox_transfer_to_contract_testing",
        "compile_contract": "sandbox_compile_contract",
        "wallet_list_my_addresses": "sandbox_list_my_addresses",
        "get_contract_info_from_gpc_file": "get_contract_info_from_gpc_file",
        "wallet_get_contracts": "wallet_get_contracts",
        "wallet_scan_contracts": "wallet_scan_contracts",
        "wallet_delegate_set_block_production": "wallet_delegate_set_block_production",
        "blockchain_get_all_contracts": "blockchain_get_all_contracts",
        "blockchain_get_forever_contracts": "blockchain_get_forever_contracts",
        "about": "about",
        "info": "info",
        "help": "help",
        "blockchain_get_info": "blockchain_get_info",
        "wallet_get_info": "wallet_get_info",
        "execute_command_line": "execute_command_line",
        "execute_script": "execute_script",
        "ntp_update_time": "ntp_update_time",
        "disk_usage": "disk_usage",
        "network_add_node": "network_add_node",
        "network_get_connection_count": "network_get_connection_count",
        "network_get_peer_info": "network_get_peer_info",
        "network_get_info": "network_get_info",
        "network_list_potential_peers": "network_list_potential_peers",
        "network_get_blocked_ips": "network_get_blocked_ips",
    }
)


def sandbox_command(name):
    """Return the command to use in place of ``name`` while the sandbox is open.

    Raises KeyError for commands that are not available in the sandbox.
    """
    try:
        return SANDBOX_COMMANDS[name]
    except KeyError:
        raise KeyError(f"command {name!r} has no sandbox counterpart") from None