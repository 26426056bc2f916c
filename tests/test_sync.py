import threading

import pytest

from actwallet.sync import SyncWatcher, parse_head_block_age, parse_rebuild_progress

INFO = (
    '{"blockchain_head_block_num":10,"blockchain_head_block_age":"12 seconds old",'
    '"blockchain_head_block_timestamp":"2017-01-01T00:00:00"}'
)


def test_parse_head_block_age():
    assert parse_head_block_age(INFO) == "12 seconds old"


def test_parse_head_block_age_missing_field():
    with pytest.raises(ValueError):
        parse_head_block_age('{"wallet_open":true}')


def test_rebuild_progress_found():
    output = "start\nReplaying blockchain... Approximately 42% complete.\n"
    assert parse_rebuild_progress(output) == "42% "


def test_rebuild_progress_uses_last_report():
    output = (
        "Replaying blockchain... Approximately 10% complete.\n"
        "Replaying blockchain... Approximately 90% complete.\n"
    )
    assert parse_rebuild_progress(output).startswith("90%")


def test_rebuild_progress_finished():
    output = "Replaying blockchain... Approximately 99% complete.\nSuccessfully replayed 100 blocks"
    assert parse_rebuild_progress(output) is None


def test_rebuild_progress_absent():
    assert parse_rebuild_progress("nothing here") is None


def test_on_info_syncs_once():
    calls = []
    watcher = SyncWatcher(lambda: None, on_sync=lambda: calls.append(1))
    assert watcher.on_info(INFO) is True
    assert watcher.on_info(INFO) is False
    assert calls == [1]
    assert watcher.synced is True
    assert watcher.head_block_age == "12 seconds old"


def test_on_info_tolerates_unreadable_reply():
    watcher = SyncWatcher(lambda: None)
    assert watcher.on_info("garbage") is True
    assert watcher.head_block_age is None


def test_start_requests_immediately_and_polls_until_synced():
    requested = threading.Event()
    count = []

    def request():
        count.append(1)
        if len(count) >= 2:
            requested.set()

    watcher = SyncWatcher(request, interval=0.01)
    watcher.start()
    assert len(count) >= 1
    assert requested.wait(2.0)
    assert watcher.polling
    watcher.on_info(INFO)
    assert not watcher.polling
    seen = len(count)
    threading.Event().wait(0.05)
    assert len(count) == seen


def test_context_manager_stops_polling():
    with SyncWatcher(lambda: None, interval=0.01) as watcher:
        assert watcher.polling
    assert not watcher.polling