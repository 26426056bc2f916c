import pytest

from actwallet.transfer import (
    TransferError,
    TransferRequest,
    check_passphrase_reply,
    clean_recipient,
    has_insufficient_funds,
    is_valid_amount_text,
    is_valid_fee_text,
    is_valid_recipient_text,
    memo_too_long,
    needs_password,
    normalize_memo,
    split_address_for_display,
    validate_transfer,
)


@pytest.mark.parametrize(
    "text, ok",
    [
        ("0", True),
        ("123.45678", True),
        ("12345678901", True),
        ("123456789012", False),
        ("0123", False),
        ("1.123456", False),
        ("", True),
        ("\t", True),
        ("1.", False),
        ("abc", False),
    ],
)
def test_amount_text(text, ok):
    assert is_valid_amount_text(text) is ok


@pytest.mark.parametrize(
    "text, ok",
    [
        ("0.01", True),
        ("999999.99", True),
        ("1234567", False),
        ("0.001", False),
        ("", True),
        ("01", False),
    ],
)
def test_fee_text(text, ok):
    assert is_valid_fee_text(text) is ok


@pytest.mark.parametrize(
    "text, ok",
    [
        ("ACTabc123", True),
        ("alice", True),
        ("my-name.x", True),
        ("0", True),
        ("123", False),
        ("-12", False),
        ("a_b", False),
        ("", False),
        ("ACT123", True),
    ],
)
def test_recipient_text(text, ok):
    assert is_valid_recipient_text(text) is ok


def test_clean_recipient_removes_whitespace():
    assert clean_recipient(" ACT abc\ndef ") == "ACTabcdef"


def test_clean_recipient_leaves_clean_text():
    assert clean_recipient("alice") == "alice"
    assert clean_recipient("a\tb") == "a\tb"


def test_memo_length_limit_counts_bytes():
    assert memo_too_long("a" * 40) is False
    assert memo_too_long("a" * 41) is True
    assert memo_too_long("转" * 14) is True
    assert memo_too_long("转" * 13) is False


def test_normalize_memo():
    assert normalize_memo("", True) == " "
    assert normalize_memo("a|b", False) == "a+b"
    assert normalize_memo("a|b", True) == "a|b"


def test_insufficient_funds_common_asset_includes_fee():
    assert has_insufficient_funds("10", "0.01", "10", "ACT", True) is True
    assert has_insufficient_funds("9.99", "0.01", "10", "ACT", True) is False


def test_insufficient_funds_strips_commas():
    assert has_insufficient_funds("999", "0.01", "1,000", "ACT", True) is False


def test_insufficient_funds_other_asset_ignores_fee():
    assert has_insufficient_funds("10", "5", "10", "XYZ", True) is False
    assert has_insufficient_funds("11", "0", "10", "XYZ", True) is True


def test_insufficient_funds_token():
    assert has_insufficient_funds("6", "0.01", "5", "TKN", False) is True
    assert has_insufficient_funds("5", "0.01", "5", "TKN", False) is False


def test_validate_transfer_success():
    request = validate_transfer("ACTabc", "5", "0.01", "", "10", True)
    assert isinstance(request, TransferRequest)
    assert request.memo == " "
    assert request.recipient == "ACTabc"
    assert request.is_address_transfer is True
    assert request.requires_password is False


def test_validate_transfer_token_memo():
    request = validate_transfer("alice", "5", "0.01", "x|y", "10", False)
    assert request.memo == "x+y"
    assert request.is_address_transfer is False


@pytest.mark.parametrize(
    "args, message",
    [
        (("", "5", "0.01", "", "10", True), "Input Address."),
        (("alice", "", "0.01", "", "10", True), "Please enter the amount."),
        (("alice", "0", "0.01", "", "10", True), "The amount can not be 0"),
        (("alice", "5", "0", "", "10", True), "The fee can not be 0"),
        (("alice", "5", "0.01", "", "0.05", True), "The ACT amount must be greater than 0.1 ."),
        (("alice", "5", "0.01", "a" * 41, "10", True), "Message length more than 40 bytes!"),
    ],
)
def test_validate_transfer_errors(args, message):
    with pytest.raises(TransferError) as info:
        validate_transfer(*args)
    assert info.value.message == message


def test_needs_password():
    assert needs_password("1000") is True
    assert needs_password("999.99999") is False
    assert needs_password("junk") is False


def test_check_passphrase_reply():
    assert check_passphrase_reply("true\n") is True
    assert check_passphrase_reply("false\n") is False
    with pytest.raises(TransferError) as info:
        check_passphrase_reply("20015 bad")
    assert info.value.message == "At least 8 letters!"
    with pytest.raises(ValueError):
        check_passphrase_reply("oops")


def test_split_address_for_display():
    short = "ACT" + "x" * 10
    assert split_address_for_display(short) == short
    long_address = "A" * 60 + "B" * 8
    shown = split_address_for_display(long_address)
    assert shown.replace("\r\n", "") == long_address
    assert shown.index("\r\n") == 60