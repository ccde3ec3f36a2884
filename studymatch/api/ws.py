"""WebSocket: real-time refetch hints for requests, matches, messages and notifications."""
from fastapi import APIRouter, WebSocket
from sqlalchemy import select

from studymatch.auth.jwt import user_id_from_token
from studymatch.database import async_session
from studymatch.models.user import User
from studymatch.services.ws_updates import updates_manager

router = APIRouter(tags=["ws"])


async def _existing_user_id(token: str) -> int | None:
    user_id = user_id_from_token(token)
    if user_id is None:
        return None
    async with async_session() as db:
        result = await db.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none()


@router.websocket("/ws/updates")
async def updates_ws(websocket: WebSocket):
    """
    Connect with ?token=JWT. After { type: 'connected' } the server pushes
    { type: 'notifications' | 'matches' | 'messages' } once the change is committed.
    Close codes: 4000 no token, 4001 invalid token or unknown user.
    """
    await websocket.accept()
    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=4000)
        return
    user_id = await _existing_user_id(token)
    if user_id is None:
        await websocket.close(code=4001)
        return
    updates_manager.connect(user_id, websocket)
    try:
        await websocket.send_json({"type": "connected"})
        while True:
            # Client frames (text or binary) are ignored; only a disconnect ends the loop.
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        updates_manager.disconnect(user_id, websocket)
