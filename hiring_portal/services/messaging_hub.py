"""
Messaging Hub

One logical room per project id. Connections subscribe to rooms; a message
sent to a room is persisted through the repository and then pushed onto the
outbound queue of every current subscriber.

Connection lifecycle: Disconnected -> Connected -> Joined(project)*. All hub
methods are synchronous and run on the event loop, so a send is persisted
and fanned out before any other hub call can interleave. Delivery to one
room is therefore FIFO, and a connection that finished `join` before `send`
returned always receives the message.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set
from uuid import uuid4

import structlog

from hiring_portal.core.exceptions import UnknownConnection, UnknownProject, UnknownSender
from hiring_portal.core.security import Role
from hiring_portal.models import Message, User
from hiring_portal.schemas.message import MessageView
from hiring_portal.services.hydration import hydrate_message
from hiring_portal.services.repository import Repository

logger = structlog.get_logger(__name__)


@dataclass
class Subscription:
    """A connected client: its id, its rooms and its outbound event queue."""

    connection_id: str
    queue: asyncio.Queue = field(default_factory=asyncio.Queue)
    rooms: Set[str] = field(default_factory=set)

    def drain(self) -> List[dict]:
        """Pop every queued event without waiting."""
        events = []
        while not self.queue.empty():
            events.append(self.queue.get_nowait())
        return events


class MessagingHub:
    """Room-scoped publish/subscribe over the shared repository."""

    def __init__(self, repository: Repository, auto_responder=None):
        self.repository = repository
        self.auto_responder = auto_responder
        self._connections: Dict[str, Subscription] = {}
        self._rooms: Dict[str, Dict[str, Subscription]] = {}
        if auto_responder is not None:
            auto_responder.attach(self)

    # Connections

    def connect(self, connection_id: str = None) -> Subscription:
        """Register a connection. Connecting a known id returns its subscription."""
        connection_id = connection_id or uuid4().hex
        subscription = self._connections.get(connection_id)
        if subscription is None:
            subscription = Subscription(connection_id=connection_id)
            self._connections[connection_id] = subscription
            logger.info("client_connected", connection_id=connection_id)
        return subscription

    def join(self, connection_id: str, project_id: str) -> Subscription:
        """
        Subscribe a connection to a project room. Joining twice is a no-op.

        The project is not required to exist: rooms are just keys.
        """
        subscription = self._connections.get(connection_id)
        if subscription is None:
            raise UnknownConnection(f"Connection {connection_id} is not connected")

        if project_id not in subscription.rooms:
            subscription.rooms.add(project_id)
            self._rooms.setdefault(project_id, {})[connection_id] = subscription
            logger.info("room_joined", connection_id=connection_id, project_id=project_id)
        return subscription

    def disconnect(self, connection_id: str) -> None:
        """Leave every room and forget the connection. Idempotent."""
        subscription = self._connections.pop(connection_id, None)
        if subscription is None:
            return

        for project_id in subscription.rooms:
            members = self._rooms.get(project_id)
            if members is None:
                continue
            members.pop(connection_id, None)
            if not members:
                del self._rooms[project_id]
        subscription.rooms.clear()
        logger.info("client_disconnected", connection_id=connection_id)

    def subscribers(self, project_id: str) -> Set[str]:
        return set(self._rooms.get(project_id, {}))

    def rooms_for(self, connection_id: str) -> Set[str]:
        subscription = self._connections.get(connection_id)
        return set(subscription.rooms) if subscription else set()

    # Messages

    def send(self, project_id: str, sender_id: str, body: str) -> MessageView:
        """
        Persist a message and broadcast it to the room.

        Raises:
            UnknownSender: sender_id is not a user (nothing persisted)
            UnknownProject: the project does not exist (nothing persisted or sent)
        """
        sender = self.repository.find_user(id=sender_id)
        if sender is None:
            raise UnknownSender(f"User {sender_id} does not exist")

        if self.repository.find_project_by_id(project_id) is None:
            raise UnknownProject(f"Project {project_id} does not exist")

        message = self.repository.create_message(project_id, sender.id, body)
        view = self.publish(message, sender=sender)
        logger.info("message_sent", project_id=project_id, sender_id=sender.id, message_id=message.id)

        if sender.role == Role.MANAGER.value and self.auto_responder is not None:
            self.auto_responder.arm(project_id)

        return view

    def publish(self, message: Message, sender: Optional[User] = None) -> MessageView:
        """Broadcast an already persisted message to its room."""
        view = hydrate_message(self.repository, message, sender=sender)
        delivered = self._broadcast(message.project_id, view.to_frame())
        logger.debug("message_broadcast", project_id=message.project_id, recipients=delivered)
        return view

    def _broadcast(self, project_id: str, event: dict) -> int:
        members = self._rooms.get(project_id)
        if not members:
            return 0
        for subscription in members.values():
            subscription.queue.put_nowait(event)
        return len(members)

    def stats(self) -> dict:
        return {
            "connections": len(self._connections),
            "rooms": len(self._rooms),
        }
