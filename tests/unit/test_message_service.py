"""MessageService tests: connection requirement, text cleaning, paging."""

import pytest

from skilllink.application.use_cases.messages import MessageService
from skilllink.core.config import Settings
from skilllink.domain.entities.message import conversation_id
from skilllink.domain.exceptions import NotAuthorizedError, ValidationException


@pytest.fixture
async def connected(connection_service) -> None:
    sent = await connection_service.request_connection("alice", "carol")
    await connection_service.accept(sent.record_id, "carol")


async def test_send_between_connected_users(message_service, message_repo, connected) -> None:
    message = await message_service.send_message("alice", "carol", "  Hi <b>Carol</b>  ")

    assert message.text == "Hi Carol"
    assert message.conversation_id == "alice_carol"
    assert message.is_from("alice")
    assert message_repo.messages["alice_carol"] == [message]


async def test_conversation_id_is_shared(message_service, connected) -> None:
    await message_service.send_message("alice", "carol", "hello")
    await message_service.send_message("carol", "alice", "hi!")

    history = await message_service.list_messages("carol", "alice")

    assert [m.text for m in history] == ["hello", "hi!"]
    assert conversation_id("carol", "alice") == conversation_id("alice", "carol")


async def test_send_requires_accepted_connection(message_service, connection_service, message_repo) -> None:
    await connection_service.request_connection("alice", "carol")

    with pytest.raises(NotAuthorizedError) as exc_info:
        await message_service.send_message("alice", "carol", "hello?")

    assert exc_info.value.details["action"] == "message"
    assert message_repo.messages == {}


async def test_send_without_connection_when_not_required(message_repo, connection_service) -> None:
    settings = Settings(_env_file=None, require_connection_for_chat=False)
    service = MessageService(message_repo, connection_service, settings)

    message = await service.send_message("alice", "bob", "hey")

    assert message.text == "hey"


@pytest.mark.parametrize("text", ["", "   ", "<script></script>"])
async def test_send_empty_text_raises(message_service, connected, text) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await message_service.send_message("alice", "carol", text)

    assert exc_info.value.details == {"field": "text"}


async def test_send_to_self_raises(message_service) -> None:
    with pytest.raises(ValidationException):
        await message_service.send_message("alice", "alice", "note to self")


async def test_send_keeps_literal_characters(message_service, message_repo, connected) -> None:
    message = await message_service.send_message("alice", "carol", "Q&A at 5 if x < 3 > y")

    assert message.text == "Q&A at 5 if x < 3 > y"
    assert message_repo.messages["alice_carol"][0].text == "Q&A at 5 if x < 3 > y"


async def test_long_text_is_rejected(message_repo, connection_service, connected) -> None:
    settings = Settings(_env_file=None, max_message_length=5)
    service = MessageService(message_repo, connection_service, settings)

    with pytest.raises(ValidationException) as exc_info:
        await service.send_message("alice", "carol", "abcdefgh")

    assert exc_info.value.details == {"field": "text"}
    assert message_repo.messages == {}
    assert (await service.send_message("alice", "carol", "abcde")).text == "abcde"


async def test_list_messages_returns_newest_page(message_repo, connection_service, connected) -> None:
    settings = Settings(_env_file=None, message_page_size=2)
    service = MessageService(message_repo, connection_service, settings)
    for text in ("one", "two", "three"):
        await service.send_message("alice", "carol", text)

    assert [m.text for m in await service.list_messages("alice", "carol")] == ["two", "three"]
    assert len(await service.list_messages("alice", "carol", limit=3)) == 3
