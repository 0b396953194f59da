import pytest

from hiring_portal.core.exceptions import InvalidReference, UnknownConnection, UnknownSender
from hiring_portal.services.messaging_hub import MessagingHub


class RecordingResponder:
    """Stands in for AutoResponder; records every arm call."""

    def __init__(self):
        self.hub = None
        self.armed = []

    def attach(self, hub):
        self.hub = hub

    def arm(self, project_id):
        self.armed.append(project_id)


@pytest.fixture
def world(repository):
    manager = repository.create_user("boss@example.com", "hash", "manager")
    candidate = repository.create_user("jane@example.com", "hash", "candidate")
    project = repository.create_project(
        full_name="Jane Roe",
        email=candidate.email,
        industry_role="Data Science",
        title="Churn Model",
        description="A model",
        project_link="https://example.com",
        repository_link=None,
        submitted_by=candidate.id,
    )
    responder = RecordingResponder()
    hub = MessagingHub(repository, responder)
    return hub, responder, manager, candidate, project


def messages_of(events):
    return [e["data"] for e in events if e["event"] == "newMessage"]


@pytest.mark.unit
def test_send_without_subscribers_persists_only(world, repository):
    hub, _, manager, _, project = world
    watcher = hub.connect("watcher")
    hub.join("watcher", "another-room")

    hub.send(project.id, manager.id, "hello?")

    assert [m.body for m in repository.list_messages_for_project(project.id)] == ["hello?"]
    assert watcher.drain() == []


@pytest.mark.unit
def test_broadcast_reaches_every_subscriber_including_sender(world):
    hub, _, manager, candidate, project = world
    sender = hub.connect("manager-conn")
    other = hub.connect("candidate-conn")
    hub.join("manager-conn", project.id)
    hub.join("candidate-conn", project.id)

    view = hub.send(project.id, candidate.id, "hi there")

    for subscription in (sender, other):
        [data] = messages_of(subscription.drain())
        assert data["id"] == view.id
        assert data["body"] == "hi there"
        assert data["projectId"] == project.id
        assert data["senderId"] == {"id": candidate.id, "email": candidate.email, "role": "candidate"}


@pytest.mark.unit
def test_delivery_is_fifo_per_room(world):
    hub, _, _, candidate, project = world
    subscription = hub.connect("c1")
    hub.join("c1", project.id)

    for i in range(10):
        hub.send(project.id, candidate.id, f"m{i}")

    assert [m["body"] for m in messages_of(subscription.drain())] == [f"m{i}" for i in range(10)]


@pytest.mark.unit
def test_join_is_idempotent(world):
    hub, _, _, candidate, project = world
    subscription = hub.connect("c1")
    hub.join("c1", project.id)
    hub.join("c1", project.id)

    hub.send(project.id, candidate.id, "once")

    assert len(messages_of(subscription.drain())) == 1
    assert hub.subscribers(project.id) == {"c1"}


@pytest.mark.unit
def test_join_does_not_require_existing_project(world):
    hub, *_ = world
    hub.connect("c1")
    hub.join("c1", "not-a-project")
    assert hub.rooms_for("c1") == {"not-a-project"}


@pytest.mark.unit
def test_join_requires_connection(world):
    hub, *_ = world
    with pytest.raises(UnknownConnection):
        hub.join("never-connected", "room")


@pytest.mark.unit
def test_disconnect_leaves_all_rooms_and_is_idempotent(world):
    hub, _, _, candidate, project = world
    subscription = hub.connect("c1")
    hub.join("c1", project.id)
    hub.join("c1", "other-room")

    hub.disconnect("c1")
    hub.disconnect("c1")
    hub.send(project.id, candidate.id, "after")

    assert hub.rooms_for("c1") == set()
    assert hub.subscribers(project.id) == set()
    assert messages_of(subscription.drain()) == []
    assert hub.stats() == {"connections": 0, "rooms": 0}


@pytest.mark.unit
def test_unknown_project_is_rejected_before_persistence(world, repository):
    hub, responder, manager, _, _ = world
    subscription = hub.connect("c1")
    hub.join("c1", "never-created")

    with pytest.raises(InvalidReference):
        hub.send("never-created", manager.id, "hello")

    assert repository.list_messages_for_project("never-created") == []
    assert subscription.drain() == []
    assert responder.armed == []


@pytest.mark.unit
def test_unknown_sender_is_rejected(world, repository):
    hub, _, _, _, project = world
    with pytest.raises(UnknownSender):
        hub.send(project.id, "ghost", "boo")
    assert repository.list_messages_for_project(project.id) == []


@pytest.mark.unit
def test_manager_message_arms_one_reply_per_send(world):
    hub, responder, manager, _, project = world
    for name in ("a", "b", "c"):
        hub.connect(name)
        hub.join(name, project.id)

    hub.send(project.id, manager.id, "first")
    hub.send(project.id, manager.id, "second")

    assert responder.armed == [project.id, project.id]


@pytest.mark.unit
def test_candidate_message_does_not_arm(world):
    hub, responder, _, candidate, project = world
    hub.send(project.id, candidate.id, "hello")
    assert responder.armed == []


@pytest.mark.unit
def test_connect_is_reentrant(world):
    hub, *_ = world
    first = hub.connect("c1")
    assert hub.connect("c1") is first
