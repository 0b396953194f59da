"""
Real-time chat transport (WebSocket)

Client frames:
    {"event": "joinProject", "data": "<projectId>"}
    {"event": "sendMessage", "data": {"projectId": ..., "body": ..., "senderId": ...}}

Server frames:
    {"event": "newMessage", "data": <message with senderId hydrated>}
    {"event": "joined", "data": {"projectId": ...}}
    {"event": "error", "data": {"detail": ...}}

Only the writer task touches the socket's send side; everything bound for
the client, errors included, goes through the connection's hub queue.
"""

import asyncio
import contextlib

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as PydanticValidationError

from hiring_portal.core.exceptions import PortalError
from hiring_portal.schemas.message import ChatFrame, JoinProjectEvent, SendMessageEvent
from hiring_portal.services.messaging_hub import MessagingHub, Subscription

logger = structlog.get_logger(__name__)
router = APIRouter()

JOIN_EVENTS = {"joinProject", "join"}
SEND_EVENTS = {"sendMessage"}


def _error(subscription: Subscription, detail: str) -> None:
    subscription.queue.put_nowait({"event": "error", "data": {"detail": detail}})


def handle_frame(hub: MessagingHub, subscription: Subscription, raw: str) -> None:
    """Apply one inbound frame to the hub."""
    try:
        frame = ChatFrame.model_validate_json(raw)

        if frame.event in JOIN_EVENTS:
            data = frame.data if isinstance(frame.data, dict) else {"projectId": frame.data}
            join = JoinProjectEvent.model_validate(data)
            hub.join(subscription.connection_id, join.project_id)
            subscription.queue.put_nowait({"event": "joined", "data": {"projectId": join.project_id}})

        elif frame.event in SEND_EVENTS:
            send = SendMessageEvent.model_validate(frame.data or {})
            hub.send(send.project_id, send.sender_id, send.body)

        else:
            _error(subscription, f"Unknown event: {frame.event}")

    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'frame'}: {err['msg']}" for err in e.errors()
        )
        _error(subscription, f"Invalid frame: {problems}")
    except PortalError as e:
        logger.warning("chat_frame_rejected", connection_id=subscription.connection_id, detail=e.detail)
        _error(subscription, e.detail)


async def _pump(websocket: WebSocket, subscription: Subscription) -> None:
    while True:
        event = await subscription.queue.get()
        await websocket.send_json(event)


@router.websocket("/ws/chat")
async def chat(websocket: WebSocket):
    """Chat connection: join project rooms and exchange messages."""
    hub: MessagingHub = websocket.app.state.hub

    await websocket.accept()
    subscription = hub.connect()
    writer = asyncio.create_task(_pump(websocket, subscription))

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            if message.get("text") is not None:
                handle_frame(hub, subscription, message["text"])
            else:
                _error(subscription, "Invalid frame: expected a JSON text frame")
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(subscription.connection_id)
        writer.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await writer
