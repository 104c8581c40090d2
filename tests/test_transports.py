"""Tests for transports and connection state."""

import socket

import pytest

from label_print_service import transports
from label_print_service.encoders import render_batch
from label_print_service.transports import (
    ConnectionState, FileTransport, NetworkTransport, Transport, send_documents,
)


class FakeSocket:
    def __init__(self, sink):
        self.sink = sink

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def sendall(self, payload):
        self.sink.append(payload)


class FlakyTransport(Transport):
    """Fails on the n-th send."""

    def __init__(self, fail_on: int):
        self.fail_on = fail_on
        self.payloads = []

    def send(self, payload, state):
        if len(self.payloads) + 1 == self.fail_on:
            return state.failed('Printer busy')
        self.payloads.append(payload)
        return state.sent(len(payload))


class TestConnectionState:

    def test_sent_returns_new_value(self) -> None:
        state = ConnectionState(device_name='TSC')
        after = state.sent(10)

        assert state.bytes_sent == 0
        assert after.bytes_sent == 10
        assert after.documents_sent == 1
        assert after.is_ready

    def test_failed(self) -> None:
        state = ConnectionState().failed('boom')

        assert state.status == 'error'
        assert state.last_error == 'boom'
        assert state.to_dict()['last_error'] == 'boom'

    def test_success_clears_error(self) -> None:
        assert ConnectionState().failed('boom').sent(1).last_error is None


class TestNetworkTransport:

    def test_send(self, monkeypatch) -> None:
        sent = []
        calls = []

        def fake_connect(address, timeout=None):
            calls.append(address)
            return FakeSocket(sent)

        monkeypatch.setattr(socket, 'create_connection', fake_connect)

        state = NetworkTransport('10.0.0.5').send(b'CLS\r\n', ConnectionState())

        assert calls == [('10.0.0.5', 9100)]
        assert sent == [b'CLS\r\n']
        assert state.bytes_sent == 5

    def test_refused(self, monkeypatch) -> None:
        def refuse(address, timeout=None):
            raise ConnectionRefusedError()

        monkeypatch.setattr(socket, 'create_connection', refuse)

        state = NetworkTransport('10.0.0.5', 9101).send(b'x', ConnectionState())

        assert state.last_error == 'Connection refused by 10.0.0.5:9101'

    def test_missing_host(self) -> None:
        state = NetworkTransport('').send(b'x', ConnectionState())

        assert state.last_error == 'Printer host not configured'


class TestFileTransport:

    def test_appends(self, tmp_path) -> None:
        path = tmp_path / 'out' / 'labels.tspl'
        transport = FileTransport(path)

        state = transport.send(b'A', ConnectionState())
        state = transport.send(b'B', state)

        assert path.read_bytes() == b'AB'
        assert state.documents_sent == 2


class TestSendDocuments:

    @pytest.fixture(autouse=True)
    def no_sleep(self, monkeypatch):
        self.sleeps = []
        monkeypatch.setattr(transports.time, 'sleep', self.sleeps.append)

    def test_sends_in_order_with_delay(self) -> None:
        documents = render_batch(['PA001', 'PA002', 'PA003'], 'barcode', 'tspl')
        transport = FlakyTransport(fail_on=0)

        state, printed = send_documents(transport, documents, ConnectionState(), delay_ms=300)

        assert printed == 3
        assert transport.payloads == [d.to_bytes() for d in documents]
        assert self.sleeps == [0.3, 0.3]
        assert state.documents_sent == 3

    def test_stops_at_first_failure(self) -> None:
        documents = render_batch(['PA001', 'PA002', 'PA003'], 'qrcode', 'zpl')
        transport = FlakyTransport(fail_on=2)

        state, printed = send_documents(transport, documents, ConnectionState(), delay_ms=0)

        assert printed == 1
        assert state.last_error == 'Printer busy'
        assert len(transport.payloads) == 1
