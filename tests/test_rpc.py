import json
import queue
import socket
import threading
import time

import pytest

from actwallet.rpc import RpcWorker, WorkerPool, parse_rpc_reply

LOGIN = json.dumps({"id": "login", "method": "login", "params": ["user", "password"]}, separators=(",", ":"))


def _rpc(rpc_id, *params):
    return json.dumps({"id": rpc_id, "method": "wallet_get_info", "params": list(params)}, separators=(",", ":"))


def _expected_result(*params):
    return '"result":' + json.dumps(list(params), separators=(",", ":"))


class _FakeNode:
    def __init__(self, split=False, silent=False):
        self.split = split
        self.silent = silent
        self.received = []
        self._stop = threading.Event()
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen()
        self._server.settimeout(0.1)
        self.port = self._server.getsockname()[1]
        threading.Thread(target=self._serve, daemon=True).start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            threading.Thread(target=self._handle, args=(conn,), daemon=True).start()

    def _handle(self, conn):
        with conn:
            while True:
                try:
                    data = conn.recv(65536)
                except OSError:
                    return
                if not data:
                    return
                self.received.append(data.decode())
                message = json.loads(data)
                if self.silent and message["id"] != "login":
                    continue
                reply = (
                    json.dumps({"id": message["id"], "result": message.get("params")}, separators=(",", ":")).encode()
                    + b"\n"
                )
                if self.split:
                    half = len(reply) // 2
                    conn.sendall(reply[:half])
                    time.sleep(0.05)
                    conn.sendall(reply[half:])
                else:
                    conn.sendall(reply)

    def close(self):
        self._stop.set()
        self._server.close()


@pytest.fixture
def node():
    fake = _FakeNode()
    yield fake
    fake.close()


def test_parse_rpc_reply_splits_id_and_result():
    assert parse_rpc_reply('{"id":"id_wallet_get_info","result":{"a":1}}\n') == (
        "id_wallet_get_info",
        '"result":{"a":1}',
    )


def test_parse_rpc_reply_keeps_index_prefix():
    rpc_id, result = parse_rpc_reply('{"id":"id_wallet_transfer_to_address_bob","result":{"index":0}}\n')
    assert rpc_id == "id_wallet_transfer_to_address_bob"
    assert result.startswith('"result":{"index":')


def test_parse_rpc_reply_without_id_raises():
    with pytest.raises(ValueError):
        parse_rpc_reply('{"result":1}')


def test_worker_logs_in_and_processes(node):
    results = []
    worker = RpcWorker(1, node.port, lambda rpc_id, result: results.append((rpc_id, result)), login=LOGIN, timeout=5)
    assert worker.busy is True
    worker.connect()
    try:
        assert worker.busy is False
        assert node.received[0] == LOGIN
        reply = worker.process(_rpc("id_wallet_get_info", "alpha"))
        assert reply == ("id_wallet_get_info", _expected_result("alpha"))
        assert results == [reply]
        assert worker.busy is False
    finally:
        worker.close()
    assert worker.connected is False


def test_worker_accumulates_split_reply():
    fake = _FakeNode(split=True)
    try:
        with RpcWorker(1, fake.port, timeout=5) as worker:
            assert worker.process(_rpc("id_split", "beta", "gamma")) == ("id_split", _expected_result("beta", "gamma"))
    finally:
        fake.close()


def test_worker_times_out_without_reply():
    fake = _FakeNode(silent=True)
    try:
        with RpcWorker(1, fake.port, timeout=0.3) as worker:
            with pytest.raises(TimeoutError):
                worker.process(_rpc("id_silent"))
            assert worker.busy is False
    finally:
        fake.close()


def test_process_before_connect_raises():
    worker = RpcWorker(1, 1)
    with pytest.raises(ConnectionError):
        worker.process(_rpc("id_any"))


def test_connect_gives_up_after_attempts():
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    worker = RpcWorker(1, port, connect_attempts=2, retry_delay=0.01, timeout=1)
    with pytest.raises(OSError):
        worker.connect()
    assert worker.connected is False


def test_pool_runs_commands_on_workers_after_the_first(node):
    results = queue.Queue()
    ids = [f"id_cmd_{n}" for n in range(6)]
    with WorkerPool(node.port, lambda rpc_id, result: results.put((rpc_id, result)), login=LOGIN, timeout=5) as pool:
        used = [pool.submit(_rpc(rpc_id, rpc_id)) for rpc_id in ids]
        collected = dict(results.get(timeout=5) for _ in ids)
    assert set(used) <= {1, 2, 3}
    assert collected == {rpc_id: _expected_result(rpc_id) for rpc_id in ids}


def test_pool_rejects_commands_after_close(node):
    pool = WorkerPool(node.port, timeout=5)
    pool.close()
    with pytest.raises(RuntimeError):
        pool.submit(_rpc("id_late"))


def test_pool_needs_two_workers():
    with pytest.raises(ValueError):
        WorkerPool(1, size=1)