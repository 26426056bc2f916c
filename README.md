# actwallet

Client-side logic for a wallet that talks to an ACT blockchain node over a
local socket. It uses only the standard library.

## Modules

- `actwallet.commands` describes wallet RPC calls. Each builder, such as
  `create`, `unlock`, `transfer_to_address`, `transfer_to_public_account_with_id`
  or `account_balance`, returns a frozen `WalletCommand` holding the method
  name, a tuple of `Param` values (each with a `ParamType` of `STRING`,
  `BOOL` or `INTEGER` and its text), and an optional prefix and postfix.
  `WalletCommand.request_id()` gives the id the reply is reported under,
  for example `id_wallet_transfer_to_address_<trx_id>`.
- `actwallet.constants` holds the name-length limits, fee minimum and
  result codes the node uses, the native asset name `COMMON_ASSET`
  (`"ACT"`), and `sandbox_command(name)`, which maps a command to the one
  used while the sandbox is open and raises `KeyError` for commands that
  have none.
- `actwallet.rpc` has `RpcWorker`, one connection to the node that can send
  a login string on `connect()` and, through `process(command)`, sends a
  command and reads until the reply is complete JSON, returning
  `(rpc_id, result)`. `WorkerPool` runs several workers on their own
  threads and `submit(command)` hands a command to the first idle one,
  keeping the first worker out of rotation. `parse_rpc_reply(text)` splits
  a raw reply into its id and result. Results can be delivered to a
  `result_sink(rpc_id, result)` callback.
- `actwallet.tokens` reads token transfer history from a block browser
  service. `build_request_url` builds the query, `parse_transactions`
  turns a reply into a `TransactionPage` of `Transaction` records (dropping
  records of other coins and those without a well-formed event parameter),
  and `TokenHistoryClient.fetch` does both, running one request at a time.
  A custom `fetcher(url) -> bytes` can be passed in place of the built-in
  HTTP download.
- `actwallet.transfer` checks transfer input: `is_valid_amount_text`,
  `is_valid_fee_text`, `is_valid_recipient_text`, `clean_recipient`,
  `memo_too_long` (40 UTF-8 bytes), `normalize_memo`,
  `has_insufficient_funds`, `needs_password` (amounts of 1000 and more),
  `check_passphrase_reply` and `split_address_for_display`.
  `validate_transfer` runs the pre-confirmation checks and returns a
  `TransferRequest`, or raises `TransferError` with the message to show.
- `actwallet.transfer_results` reads the node's replies:
  `check_address_result`, `parse_transfer_result` (a `TransferOutcome`
  with the message, entry id or node error), `transfer_error_message` and
  `matches_transfer_id`.
- `actwallet.names` checks a proposed address name when upgrading an
  account: `check_address_name` returns a `NameStatus`, and
  `balance_allows_upgrade` tells whether a balance covers the 0.01 fee.
- `actwallet.sync` follows node start-up: `parse_head_block_age`,
  `parse_rebuild_progress`, and `SyncWatcher`, which calls a
  `request_info` callback every few seconds until `on_info` receives the
  first reply, then calls `on_sync` once.

## Example

```python
from actwallet.commands import transfer_to_address
from actwallet.transfer import TransferError, validate_transfer

try:
    request = validate_transfer("ACTexampleaddress", "12.5", "0.01", "rent", act_balance=100.0, is_asset=True)
except TransferError as error:
    print(error.message)
else:
    command = transfer_to_address(request.amount, "ACT", "alice", request.recipient, request.memo, "vote_none")
    print(command.request_id())  # id_wallet_transfer_to_address
```

## What it does not do

- There is no user interface and no command-line program.
- It does not start or manage the node process.
- `WalletCommand` only describes a call; the package does not render it
  into the text sent over the socket. `RpcWorker.process` and
  `WorkerPool.submit` take that text ready-made.
- Accounts, contacts and pending transfers are not stored anywhere.

## Installation

```
pip install .
```

## Tests

```
pip install .[test]
pytest
```