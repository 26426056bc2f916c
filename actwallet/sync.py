"""Waiting for the node to come up and report its chain state."""

from __future__ import annotations

import threading
from collections.abc import Callable

INFO_INTERVAL = 5.0
_AGE_KEY = '"blockchain_head_block_age":'
_TIMESTAMP_KEY = '"blockchain_head_block_timestamp":'
_REPLAY_MARKER = "Replaying blockchain... Approximately "
_REPLAY_DONE = "Successfully replayed"
_COMPLETE = "complete."


def parse_head_block_age(info):
    """Return the head block age reported in an info reply, without quotes.

    Raises ValueError when the reply lacks the age or the timestamp field.
    """
    start = info.find(_AGE_KEY)
    end = info.find(_TIMESTAMP_KEY)
    if start < 0 or end < 0:
        raise ValueError("info reply has no head block age")
    start += len(_AGE_KEY)
    # The field is followed by a comma before the timestamp key.
    return info[start : end - 1].strip().strip('"')


def parse_rebuild_progress(output):
    """Return the progress text of a chain replay, or None if none is under way."""
    if _REPLAY_MARKER not in output or _REPLAY_DONE in output:
        return None
    percent = output.split(_REPLAY_MARKER)[-1]
    end = percent.find(_COMPLETE)
    return percent if end < 0 else percent[:end]


class SyncWatcher:
    """Polls the node for its info until the first reply arrives, then reports sync once."""

    def __init__(
        self,
        request_info: Callable[[], None],
        on_sync: Callable[[], None] | None = None,
        interval: float = INFO_INTERVAL,
    ):
        self.request_info = request_info
        self.on_sync = on_sync
        self.interval = interval
        self.synced = False
        self.head_block_age: str | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def polling(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def start(self):
        """Ask for info now and then every ``interval`` seconds until synced."""
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._poll, name="sync-watcher", daemon=True)
        self._thread.start()
        self.request_info()

    def _poll(self):
        while not self._stop.wait(self.interval):
            self.request_info()

    def stop(self):
        """Stop polling."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def on_info(self, result):
        """Handle an info reply; return True when this reply completed the sync."""
        try:
            self.head_block_age = parse_head_block_age(result)
        except ValueError:
            self.head_block_age = None
        with self._lock:
            if self.synced:
                return False
            self.synced = True
        self.stop()
        if self.on_sync is not None:
            self.on_sync()
        return True

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.stop()