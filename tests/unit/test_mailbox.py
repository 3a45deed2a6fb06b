"""Tests for Mailbox selective receive."""

import asyncio

import pytest

from unit_issues.mailbox import Mailbox


async def test_receives_queued_message() -> None:
    """Returns a message that is already queued."""
    mailbox: Mailbox[str] = Mailbox()
    mailbox.send("hello")

    assert await mailbox.receive(lambda m: True) == "hello"
    assert len(mailbox) == 0


async def test_skips_non_matching_messages() -> None:
    """Leaves non-matching messages queued in their order."""
    mailbox: Mailbox[int] = Mailbox()
    for n in (1, 2, 3, 4):
        mailbox.send(n)

    assert await mailbox.receive(lambda m: m % 2 == 0) == 2
    assert await mailbox.receive(lambda m: True) == 1
    assert await mailbox.receive(lambda m: True) == 3
    assert await mailbox.receive(lambda m: True) == 4


async def test_waits_for_matching_message() -> None:
    """Waits until a matching message is sent."""
    mailbox: Mailbox[str] = Mailbox()
    loop = asyncio.get_running_loop()
    loop.call_later(0.01, mailbox.send, "ignored")
    loop.call_later(0.02, mailbox.send, "wanted")

    result = await mailbox.receive(lambda m: m == "wanted", timeout=5)

    assert result == "wanted"
    assert len(mailbox) == 1


async def test_zero_timeout_inspects_queued_messages() -> None:
    """A timeout of 0 still finds messages already queued."""
    mailbox: Mailbox[str] = Mailbox()
    mailbox.send("ready")

    assert await mailbox.receive(lambda m: m == "ready", timeout=0) == "ready"


async def test_raises_timeout_error() -> None:
    """Raises TimeoutError when no matching message arrives in time."""
    mailbox: Mailbox[str] = Mailbox()
    mailbox.send("other")

    with pytest.raises(TimeoutError):
        await mailbox.receive(lambda m: m == "wanted", timeout=0.02)

    assert len(mailbox) == 1


async def test_zero_timeout_on_empty_mailbox() -> None:
    """Times out immediately with a timeout of 0 and nothing queued."""
    mailbox: Mailbox[str] = Mailbox()

    with pytest.raises(TimeoutError):
        await mailbox.receive(lambda m: True, timeout=0)
