"""
Transports
==========

Byte sinks for encoded command streams.

Connection state is an immutable value passed into every send and returned,
updated, from it::

    state = ConnectionState(device_name='TSC Alpha-40L')
    transport = NetworkTransport('192.168.1.50')
    state = transport.send(encode('PA00001', 'barcode').encode(), state)
    if state.last_error:
        ...
"""

import logging
import socket
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, Iterable, Tuple

from .config import RAW_PORT, DEFAULT_TIMEOUT, PRINT_DELAY_MS
from .models import CommandDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionState:
    """Connection status of a transport after the last operation."""

    device_name: str = "Unknown"
    status: str = "disconnected"  # disconnected, ready, error
    bytes_sent: int = 0
    documents_sent: int = 0
    last_error: Optional[str] = None
    last_activity: Optional[datetime] = None

    @property
    def is_ready(self) -> bool:
        return self.status == "ready"

    def sent(self, byte_count: int) -> 'ConnectionState':
        return replace(
            self,
            status="ready",
            bytes_sent=self.bytes_sent + byte_count,
            documents_sent=self.documents_sent + 1,
            last_error=None,
            last_activity=datetime.now(),
        )

    def failed(self, error: str) -> 'ConnectionState':
        return replace(self, status="error", last_error=error, last_activity=datetime.now())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'device_name': self.device_name,
            'status': self.status,
            'bytes_sent': self.bytes_sent,
            'documents_sent': self.documents_sent,
            'last_error': self.last_error,
            'last_activity': self.last_activity.isoformat() if self.last_activity else None,
        }


class Transport(ABC):
    """Abstract byte sink."""

    @abstractmethod
    def send(self, payload: bytes, state: ConnectionState) -> ConnectionState:
        """
        Deliver one payload.

        Returns:
            Updated state; failures are reported in ``last_error``
        """
        pass


class NetworkTransport(Transport):
    """Raw TCP printing (port 9100)."""

    def __init__(self, host: str, port: int = RAW_PORT, timeout: int = DEFAULT_TIMEOUT):
        self.host = host
        self.port = port or RAW_PORT
        self.timeout = timeout

    def send(self, payload: bytes, state: ConnectionState) -> ConnectionState:
        if not self.host:
            return state.failed('Printer host not configured')

        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
                sock.sendall(payload)
        except socket.timeout:
            return state.failed(f'Connection timeout to {self.host}:{self.port}')
        except ConnectionRefusedError:
            return state.failed(f'Connection refused by {self.host}:{self.port}')
        except OSError as e:
            return state.failed(str(e))

        logger.debug("Sent %d bytes to %s:%d", len(payload), self.host, self.port)
        return state.sent(len(payload))

    def test_connection(self, state: ConnectionState) -> ConnectionState:
        """Open and close a TCP connection without sending anything."""
        if not self.host:
            return state.failed('Printer host not configured')
        try:
            with socket.create_connection((self.host, self.port), timeout=5):
                pass
        except OSError as e:
            return state.failed(str(e) or f'Cannot connect to {self.host}:{self.port}')
        return replace(state, status="ready", last_error=None, last_activity=datetime.now())


class FileTransport(Transport):
    """Append payloads to a command file (the download path)."""

    def __init__(self, path):
        self.path = Path(path)

    def send(self, payload: bytes, state: ConnectionState) -> ConnectionState:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'ab') as f:
                f.write(payload)
        except OSError as e:
            return state.failed(str(e))
        return state.sent(len(payload))


def send_documents(transport: Transport, documents: Iterable[CommandDocument],
                   state: ConnectionState,
                   delay_ms: int = PRINT_DELAY_MS) -> Tuple[ConnectionState, int]:
    """
    Send documents one at a time, in order, pausing between them.

    Stops at the first failed send.

    Returns:
        (final state, number of documents delivered)
    """
    printed = 0
    for index, document in enumerate(documents):
        if index and delay_ms:
            time.sleep(delay_ms / 1000)

        state = transport.send(document.to_bytes(), state)
        if state.last_error:
            logger.warning("Label %d (%s) failed: %s", index + 1, document.code, state.last_error)
            break
        printed += 1

    return state, printed
