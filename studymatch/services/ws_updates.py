"""Connection manager for push hints (requests, matches, messages, notifications). Avoids circular imports."""
import asyncio
import json
import logging
from typing import Any, Iterable, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class UpdatesConnectionManager:
    """Maps user_id -> set of WebSockets. Clients refetch the named resource when hinted."""

    def __init__(self) -> None:
        self._connections: dict[int, Set[WebSocket]] = {}

    def connect(self, user_id: int, websocket: WebSocket) -> None:
        if user_id not in self._connections:
            self._connections[user_id] = set()
        self._connections[user_id].add(websocket)

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        if user_id in self._connections:
            self._connections[user_id].discard(websocket)
            if not self._connections[user_id]:
                del self._connections[user_id]

    def is_connected(self, user_id: int) -> bool:
        return bool(self._connections.get(user_id))

    async def notify_user(self, user_id: int, message: dict[str, Any]) -> None:
        if not self.is_connected(user_id):
            return
        text = json.dumps(message)
        dead = set()
        for ws in list(self._connections[user_id]):
            try:
                await ws.send_text(text)
            except Exception:
                # Hints are best-effort; a closed socket must not fail the write that triggered it.
                logger.debug("Dropping dead socket for user %s", user_id)
                dead.add(ws)
        for ws in dead:
            self.disconnect(user_id, ws)

    async def notify_users(self, user_ids: Iterable[int], message: dict[str, Any]) -> None:
        await asyncio.gather(*[self.notify_user(uid, message) for uid in set(user_ids)])


updates_manager = UpdatesConnectionManager()
