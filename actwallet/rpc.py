"""Local JSON-RPC connections to the wallet node and a small pool of workers."""

from __future__ import annotations

import json
import logging
import queue
import socket
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

NUM_WORKERS = 4
DEFAULT_HOST = "127.0.0.1"
REPLY_TIMEOUT = 120.0
JOIN_TIMEOUT = 5.0
_CHUNK = 65536

ResultSink = Callable[[str, str], None]


def parse_rpc_reply(text):
    """Split a raw reply into its request id and the text after the id.

    The id is the quoted value following ``"id":``; the result is everything
    after the first comma, less the last two characters (closing brace and
    line end).
    """
    id_pos = text.find('"id":')
    comma = text.find(",")
    if id_pos < 0 or comma < 0:
        raise ValueError("reply carries no request id")
    rpc_id = text[id_pos + 6 : comma - 1]
    result = text[comma + 1 :]
    if len(result) >= 2:
        result = result[:-2]
    return rpc_id, result


class RpcWorker:
    """One connection to the node; sends a command and waits for its whole reply."""

    def __init__(
        self,
        worker_id: int,
        port: int,
        result_sink: ResultSink | None = None,
        *,
        host: str = DEFAULT_HOST,
        login: str | None = None,
        timeout: float = REPLY_TIMEOUT,
        connect_attempts: int | None = None,
        retry_delay: float = 0.1,
    ):
        self.worker_id = worker_id
        self.port = port
        self.host = host
        self.result_sink = result_sink
        self.login = login
        self.timeout = timeout
        self.connect_attempts = connect_attempts
        self.retry_delay = retry_delay
        self.busy = True
        self._socket: socket.socket | None = None

    @property
    def connected(self) -> bool:
        return self._socket is not None

    def connect(self):
        """Connect, retrying until it succeeds or the attempts run out, then log in."""
        attempt = 0
        while True:
            attempt += 1
            try:
                sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
                break
            except OSError:
                if self.connect_attempts is not None and attempt >= self.connect_attempts:
                    raise
                time.sleep(self.retry_delay)
        self._socket = sock
        if self.login is not None:
            sock.sendall(self.login.encode("utf-8"))
            try:
                reply = sock.recv(_CHUNK)
            except TimeoutError:
                reply = b""
            logger.debug("rpc login %s: %r", self.worker_id, reply)
        self.busy = False

    def process(self, command):
        """Send ``command`` and return ``(rpc_id, result)`` once a complete reply arrived."""
        if self._socket is None:
            raise ConnectionError(f"worker {self.worker_id} is not connected")
        self.busy = True
        try:
            self._socket.sendall(command.encode("utf-8"))
            received = b""
            while True:
                chunk = self._socket.recv(_CHUNK)
                if not chunk:
                    raise ConnectionError("connection closed before a complete reply")
                received += chunk
                text = received.decode("utf-8", errors="replace")
                try:
                    json.loads(text)
                except ValueError:
                    continue
                break
            rpc_id, result = parse_rpc_reply(text)
            if self.result_sink is not None:
                self.result_sink(rpc_id, result)
            return rpc_id, result
        finally:
            self.busy = False

    def close(self):
        """Drop the connection; the worker takes no more commands."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None
        self.busy = True

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *exc_info):
        self.close()


class WorkerPool:
    """Workers each running on their own thread; commands go to the first idle one.

    The first worker is kept out of the rotation, as the node reserves that
    connection.
    """

    def __init__(
        self,
        port: int,
        result_sink: ResultSink | None = None,
        *,
        host: str = DEFAULT_HOST,
        login: str | None = None,
        timeout: float = REPLY_TIMEOUT,
        size: int = NUM_WORKERS,
        poll_interval: float = 0.1,
        connect_attempts: int | None = None,
        join_timeout: float = JOIN_TIMEOUT,
    ):
        if size < 2:
            raise ValueError("a pool needs at least two workers")
        self.poll_interval = poll_interval
        self.join_timeout = join_timeout
        self.workers = [
            RpcWorker(
                index,
                port,
                result_sink,
                host=host,
                login=login,
                timeout=timeout,
                connect_attempts=connect_attempts,
            )
            for index in range(size)
        ]
        self._queues: list[queue.Queue] = [queue.Queue() for _ in self.workers]
        self._lock = threading.Lock()
        self._closed = False
        self._threads = [
            threading.Thread(target=self._run, args=(worker, tasks), name=f"rpc-worker-{worker.worker_id}", daemon=True)
            for worker, tasks in zip(self.workers, self._queues)
        ]
        for thread in self._threads:
            thread.start()

    @staticmethod
    def _run(worker: RpcWorker, tasks: queue.Queue):
        try:
            worker.connect()
        except OSError:
            logger.exception("worker %s could not connect", worker.worker_id)
            return
        try:
            while True:
                command = tasks.get()
                if command is None:
                    break
                try:
                    worker.process(command)
                except Exception:
                    logger.exception("worker %s failed on a command", worker.worker_id)
        finally:
            worker.close()

    def submit(self, command):
        """Hand ``command`` to an idle worker, waiting for one if needed; return its id."""
        while True:
            if self._closed:
                raise RuntimeError("worker pool is closed")
            with self._lock:
                for worker, tasks in zip(self.workers[1:], self._queues[1:]):
                    if not worker.busy:
                        worker.busy = True
                        tasks.put(command)
                        return worker.worker_id
            time.sleep(self.poll_interval)

    def close(self):
        """Stop every worker after the commands already handed to it."""
        self._closed = True
        for tasks in self._queues:
            tasks.put(None)
        for thread in self._threads:
            thread.join(self.join_timeout)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()