"""Tests for MessageBus construction and BusChannel."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from syntaxbot.messagebus.base import BusChannel, MessageBus
from syntaxbot.messagebus.discord_bus import DiscordBus
from syntaxbot.utils.config import Config, DiscordConfig, MessageBusConfig


def test_from_config_without_buses(tmp_path):
    assert MessageBus.from_config(Config(workspace=tmp_path)) == []


def test_from_config_with_discord(tmp_path):
    config = Config(
        workspace=tmp_path,
        messagebus=MessageBusConfig(
            enabled=True,
            default_platform="discord",
            discord=DiscordConfig(bot_token="t"),
        ),
    )
    buses = MessageBus.from_config(config)
    assert len(buses) == 1
    assert isinstance(buses[0], DiscordBus)


def test_disabled_discord_is_skipped(tmp_path):
    config = Config(
        workspace=tmp_path,
        messagebus=MessageBusConfig(discord=DiscordConfig(bot_token="t", enabled=False)),
    )
    assert MessageBus.from_config(config) == []


def test_disabled_messagebus_creates_no_buses(tmp_path):
    config = Config(
        workspace=tmp_path,
        messagebus=MessageBusConfig(enabled=False, discord=DiscordConfig(bot_token="t")),
    )
    assert MessageBus.from_config(config) == []


@pytest.mark.anyio
async def test_bus_channel_replies_through_bus():
    bus = MagicMock()
    bus.reply = AsyncMock()
    context = object()

    await BusChannel(bus, context).send("hello")

    bus.reply.assert_called_once_with("hello", context)
