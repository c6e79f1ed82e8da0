"""Tests for the edit-in-place message publisher."""

from notifications.base import MessagePayload
from notifications.publisher import MessagePublisher, PublishOutcome


def payload(title="status"):
    return MessagePayload(embed={"title": title})


async def test_first_publish_creates_and_tracks(transport):
    publisher = MessagePublisher(transport)

    outcome = await publisher.publish("srv", "100", payload())

    assert outcome is PublishOutcome.CREATED
    assert len(transport.sent) == 1
    assert transport.edited == []
    handle = publisher.get_tracked("srv")
    assert handle is not None
    assert handle.channel_id == "100"


async def test_second_publish_edits_same_message(transport):
    publisher = MessagePublisher(transport)
    await publisher.publish("srv", "100", payload("one"))
    handle = publisher.get_tracked("srv")

    outcome = await publisher.publish("srv", "100", payload("two"))

    assert outcome is PublishOutcome.EDITED
    assert len(transport.sent) == 1
    assert transport.edited[0][0] == handle
    assert transport.edited[0][1].embed["title"] == "two"
    assert publisher.get_tracked("srv") == handle


async def test_failed_edit_keeps_handle(transport):
    publisher = MessagePublisher(transport)
    await publisher.publish("srv", "100", payload())
    handle = publisher.get_tracked("srv")
    transport.fail_edit = True

    assert await publisher.publish("srv", "100", payload()) is PublishOutcome.EDIT_FAILED
    assert await publisher.publish("srv", "100", payload()) is PublishOutcome.EDIT_FAILED

    assert len(transport.sent) == 1
    assert [edited[0] for edited in transport.edited] == [handle, handle]
    assert publisher.get_tracked("srv") == handle


async def test_missing_channel_skips_cycle(transport):
    publisher = MessagePublisher(transport)

    outcome = await publisher.publish("srv", "999", payload())

    assert outcome is PublishOutcome.CHANNEL_NOT_FOUND
    assert not outcome.ok
    assert transport.sent == []
    assert publisher.get_tracked("srv") is None


async def test_missing_channel_keeps_existing_handle(transport):
    publisher = MessagePublisher(transport)
    await publisher.publish("srv", "100", payload())
    handle = publisher.get_tracked("srv")
    del transport.channels["100"]

    assert await publisher.publish("srv", "100", payload()) is PublishOutcome.CHANNEL_NOT_FOUND
    assert publisher.get_tracked("srv") == handle
    assert transport.edited == []


async def test_failed_create_is_retried_next_time(transport):
    publisher = MessagePublisher(transport)
    transport.fail_send = True

    assert await publisher.publish("srv", "100", payload()) is PublishOutcome.CREATE_FAILED
    assert publisher.get_tracked("srv") is None

    transport.fail_send = False
    assert await publisher.publish("srv", "100", payload()) is PublishOutcome.CREATED
    assert len(transport.sent) == 2


async def test_servers_tracked_separately(transport):
    publisher = MessagePublisher(transport)
    await publisher.publish("a", "100", payload())
    await publisher.publish("b", "200", payload())

    assert publisher.get_tracked("a") != publisher.get_tracked("b")
    assert publisher.get_tracked("b").channel_id == "200"


async def test_forget(transport):
    publisher = MessagePublisher(transport)
    await publisher.publish("srv", "100", payload())
    publisher.forget("srv")

    assert await publisher.publish("srv", "100", payload()) is PublishOutcome.CREATED
    assert len(transport.sent) == 2
