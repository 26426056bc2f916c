"""Token transfer history fetched from the block browser service."""

from __future__ import annotations

import json
import re
import ssl
import threading
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from .constants import COMMON_ASSET

_EVENT_PARAM = re.compile(r"(^ACT.*):([0-9]{1,}),(ACT.*):([0-9]{1,}),(.*),(.*)")
_BALANCE_SCALE = Decimal(100000)
_DEPOSIT_MEMO_PREFIX = "deposit toACT"


@dataclass
class Transaction:
    """One token transfer as reported by the block browser."""

    from_account: str = ""
    from_address: str = ""
    to_account: str = ""
    to_address: str = ""
    amount: str = ""
    trx_time: str = ""
    from_balance: str = ""
    to_balance: str = ""
    memo: str = ""
    fee: str = ""
    coin_type: str = ""


@dataclass
class TransactionPage:
    """One page of an account's token history."""

    current_page: int = 0
    total_page: int = 0
    page_size: int = 0
    total_records: int = 0
    page: int = 0
    account_name: str = ""
    address: str = ""
    contract_id: str = ""
    transactions: list[Transaction] = field(default_factory=list)


def _to_int(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0


def _to_str(value) -> str:
    return value if isinstance(value, str) else ""


def _format_balance(digits: str) -> str:
    text = format(Decimal(digits) / _BALANCE_SCALE, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_transactions(document, currency_name):
    """Build a page of transactions from a block browser reply.

    ``document`` is the decoded JSON object, or its text. Records of another
    coin than ``currency_name`` are dropped (unless it is the common asset) and
    reduce the reported total; records without a well-formed event parameter
    are dropped silently.
    """
    if isinstance(document, (str, bytes, bytearray)):
        document = json.loads(document)
    if not isinstance(document, Mapping):
        raise ValueError("block browser reply is not a JSON object")

    result = document.get("result")
    if not isinstance(result, Mapping):
        result = {}
    records = result.get("dataList")
    if not isinstance(records, list):
        records = []

    page = TransactionPage(
        current_page=_to_int(result.get("currentPage")),
        total_page=_to_int(result.get("totalPage")),
        page_size=_to_int(result.get("pageSize")),
        total_records=_to_int(result.get("totalRecords")),
    )

    for record in records:
        if not isinstance(record, Mapping):
            record = {}
        coin_type = _to_str(record.get("coinType"))
        if currency_name != COMMON_ASSET and coin_type != currency_name:
            page.total_records = max(page.total_records - 1, 0)
            continue

        memo = _to_str(record.get("memo"))
        if memo.startswith(_DEPOSIT_MEMO_PREFIX):
            memo = ""

        match = _EVENT_PARAM.fullmatch(_to_str(record.get("eventParam")))
        if match is None:
            continue

        page.transactions.append(
            Transaction(
                from_account=_to_str(record.get("from_acct")),
                from_address=_to_str(record.get("from_addr")),
                to_account=_to_str(record.get("to_acct")),
                to_address=_to_str(record.get("to_addr")),
                amount=_to_str(record.get("amount")),
                trx_time=_to_str(record.get("trx_time")),
                from_balance=_format_balance(match.group(2)),
                to_balance=_format_balance(match.group(4)),
                memo=memo,
                fee=_to_str(record.get("fee")),
                coin_type=coin_type,
            )
        )
    return page


def build_request_url(base_url, account_address, contract_id, page, per_page):
    """Return the history query URL; every parameter is followed by '&'."""
    params = (
        f"acct_address={account_address}",
        f"contract_id={contract_id}",
        f"page={int(page)}",
        f"per_page={int(per_page)}",
    )
    return base_url + "".join(f"{param}&" for param in params)


class TokenHistoryClient:
    """Fetches token history pages; only one request runs at a time."""

    def __init__(
        self,
        base_url: str,
        fetcher: Callable[[str], bytes] | None = None,
        timeout: float = 30.0,
        on_finished: Callable[[], None] | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.on_finished = on_finished
        self.page: TransactionPage | None = None
        self._fetcher = fetcher or self._download
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def fetch(self, account_address, contract_id, page, per_page=10, currency_name=COMMON_ASSET):
        """Request one page of history.

        Returns None without requesting anything if a request is already in
        progress, and None when the reply is not a JSON object.
        """
        if not self._lock.acquire(blocking=False):
            return None
        try:
            url = build_request_url(self.base_url, account_address, contract_id, page, per_page)
            body = self._fetcher(url)
            try:
                parsed = parse_transactions(body, currency_name)
            except ValueError:
                return None
            parsed.address = account_address
            parsed.page = page
            parsed.contract_id = contract_id
            self.page = parsed
            return parsed
        finally:
            self._lock.release()
            if self.on_finished is not None:
                self.on_finished()

    def _download(self, url: str) -> bytes:
        context = None
        if url.startswith("https"):
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        with urllib.request.urlopen(url, timeout=self.timeout, context=context) as response:
            return response.read()