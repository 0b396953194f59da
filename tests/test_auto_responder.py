import asyncio

import pytest

from hiring_portal.config import settings
from hiring_portal.core.scheduler import create_scheduler, start_scheduler, stop_scheduler
from hiring_portal.services.auto_responder import AutoResponder
from hiring_portal.services.messaging_hub import MessagingHub


@pytest.fixture
def people(repository):
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
    return manager, candidate, project


@pytest.fixture
async def scheduler():
    scheduler = create_scheduler()
    start_scheduler(scheduler)
    yield scheduler
    stop_scheduler(scheduler)


async def wait_for(predicate, timeout=2.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


@pytest.mark.unit
async def test_fire_persists_and_broadcasts_reply(repository, people):
    manager, candidate, project = people
    responder = AutoResponder(repository, create_scheduler(), delay_seconds=0)
    hub = MessagingHub(repository, responder)
    subscription = hub.connect("room-watcher")
    hub.join("room-watcher", project.id)

    message_id = await responder.fire(project.id)

    [stored] = repository.list_messages_for_project(project.id)
    assert stored.id == message_id
    assert stored.sender_id == candidate.id
    assert stored.body == settings.AUTO_REPLY_MESSAGE

    [event] = subscription.drain()
    assert event["event"] == "newMessage"
    assert event["data"]["senderId"]["email"] == candidate.email


@pytest.mark.unit
async def test_fire_drops_when_project_missing(repository):
    responder = AutoResponder(repository, create_scheduler(), delay_seconds=0)
    MessagingHub(repository, responder)

    assert await responder.fire("never-created") is None
    assert responder.stats()["dropped"] == 1


@pytest.mark.unit
async def test_fire_drops_when_candidate_missing(repository):
    # The project belongs to a user whose email differs from the submission email
    owner = repository.create_user("owner@example.com", "hash", "candidate")
    project = repository.create_project(
        full_name="Nobody",
        email="unregistered@example.com",
        industry_role="Design",
        title="Orphan",
        description="",
        project_link="https://example.com",
        repository_link=None,
        submitted_by=owner.id,
    )
    responder = AutoResponder(repository, create_scheduler(), delay_seconds=0)
    MessagingHub(repository, responder)

    assert await responder.fire(project.id) is None
    assert repository.list_messages_for_project(project.id) == []


@pytest.mark.unit
async def test_manager_message_gets_delayed_reply(repository, people, scheduler):
    manager, candidate, project = people
    responder = AutoResponder(repository, scheduler, delay_seconds=0.05)
    hub = MessagingHub(repository, responder)
    subscription = hub.connect("c1")
    hub.join("c1", project.id)

    hub.send(project.id, manager.id, "Are you available?")
    # Nothing but the manager's own message until the delay passes
    assert len(subscription.drain()) == 1

    await wait_for(lambda: len(repository.list_messages_for_project(project.id)) == 2)
    [reply] = subscription.drain()
    assert reply["data"]["senderId"]["id"] == candidate.id


@pytest.mark.unit
async def test_each_manager_message_arms_its_own_reply(repository, people, scheduler):
    manager, candidate, project = people
    responder = AutoResponder(repository, scheduler, delay_seconds=0.05)
    hub = MessagingHub(repository, responder)

    for i in range(3):
        hub.send(project.id, manager.id, f"ping {i}")

    await wait_for(lambda: responder.stats()["delivered"] == 3)
    replies = [m for m in repository.list_messages_for_project(project.id) if m.sender_id == candidate.id]
    assert len(replies) == 3


@pytest.mark.unit
async def test_sender_disconnect_does_not_cancel_reply(repository, people, scheduler):
    manager, candidate, project = people
    responder = AutoResponder(repository, scheduler, delay_seconds=0.05)
    hub = MessagingHub(repository, responder)
    hub.connect("manager-conn")
    hub.join("manager-conn", project.id)
    watcher = hub.connect("watcher")
    hub.join("watcher", project.id)

    hub.send(project.id, manager.id, "bye")
    hub.disconnect("manager-conn")

    await wait_for(lambda: responder.stats()["delivered"] == 1)
    bodies = [e["data"]["body"] for e in watcher.drain()]
    assert bodies == ["bye", settings.AUTO_REPLY_MESSAGE]
