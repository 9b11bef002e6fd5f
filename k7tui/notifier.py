"""Real-time notifications delivered over a WebSocket."""

from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Any

import websocket

from k7tui.models import Notification
from k7tui.state import AppState

logger = logging.getLogger(__name__)

WS_BASE_URL = "ws://localhost:8080/ws/"
RETRY_DELAY = 1.0

Connector = Callable[[str], Any]


def ws_url(user_id: str) -> str:
    """Return the notification endpoint for a user."""
    return WS_BASE_URL + user_id


def _read_json(conn: Any) -> dict[str, Any]:
    """Receive one frame and decode it as a JSON object."""
    message = json.loads(conn.recv())
    if not isinstance(message, dict):
        raise ValueError("expected a JSON object")
    return message


class WebSocketManager:
    """Keeps one notification connection and feeds messages into the state."""

    def __init__(
        self,
        state: AppState,
        on_notification: Callable[[Notification], None] | None = None,
        *,
        connector: Connector = websocket.create_connection,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._state = state
        self._on_notification = on_notification
        self._connector = connector
        self._clock = clock
        self._lock = threading.Lock()
        self._conn: Any = None
        self._connected = False
        self._stop = threading.Event()

    def connect(self, user_id: str) -> None:
        """Open the connection for ``user_id`` unless one is already open.

        A failure to connect is logged and leaves the manager disconnected.
        """
        with self._lock:
            if self._connected:
                return
            url = ws_url(user_id)
            try:
                conn = self._connector(url)
            except Exception as exc:
                logger.warning("WebSocket connection error: %s", exc)
                return
            self._conn = conn
            self._connected = True
            self._stop = threading.Event()
            reader = threading.Thread(
                target=self._read_messages, args=(conn, self._stop), daemon=True
            )
            reader.start()

    def _read_messages(self, conn: Any, stop: threading.Event) -> None:
        try:
            while not stop.is_set():
                try:
                    message = _read_json(conn)
                except Exception as exc:
                    logger.warning("WebSocket read error: %s", exc)
                    return
                notification = Notification.from_message(message, self._clock())
                self._state.add_notification(notification)
                if self._on_notification is not None:
                    self._on_notification(notification)
                logger.info("🔔 Notification: %s - %s", notification.type, notification.message)
        finally:
            with self._lock:
                if self._conn is conn:
                    self._conn = None
                    self._connected = False
            conn.close()

    def is_connected(self) -> bool:
        """Return whether a connection is open."""
        with self._lock:
            return self._connected

    def disconnect(self) -> None:
        """Close the open connection, if any."""
        with self._lock:
            if not self._connected:
                return
            self._stop.set()
            conn, self._conn = self._conn, None
            self._connected = False
        if conn is not None:
            conn.close()


def watch_notifications(user_id: str) -> Iterator[dict[str, Any]]:
    """Yield every JSON object received on the user's notification endpoint.

    A failure to connect raises. A read error is logged and retried after a
    short pause, indefinitely.
    """
    conn = websocket.create_connection(ws_url(user_id))
    try:
        while True:
            try:
                message = _read_json(conn)
            except Exception as exc:
                logger.warning("WebSocket read error: %s", exc)
                time.sleep(RETRY_DELAY)
                continue
            logger.info("🔔 Notification: %r", message)
            yield message
    finally:
        conn.close()