import dataclasses
from typing import Callable, Union
from unittest import mock

import discord
from discord import ClientUser, Interaction, TextChannel, User
import pytest

from birthdaybot.context import AppContext
from birthdaybot.core.config import Config
from birthdaybot.services.birthday import BirthdayService
from birthdaybot.services.database import Database


@pytest.fixture()
def config(tmp_path) -> Config:
    return Config(
        TOKEN="test-token",
        DSN=str(tmp_path / "birthdays.db"),
        LOG_DIR=tmp_path / "logs",
    )


@pytest.fixture()
def db(config: Config) -> Database:
    database = Database(config.DSN)
    assert database.is_healthy
    return database


@pytest.fixture()
def context(config: Config, db: Database) -> AppContext:
    return AppContext(config=config, db=db)


@pytest.fixture()
def setChannel(context: AppContext) -> Callable[[int], None]:
    """Point birthday announcements at a channel ID (0 for DMs)."""

    def factoryFn(channelId: int) -> None:
        context.config = dataclasses.replace(context.config, BIRTHDAY_CHANNEL_ID=channelId)

    return factoryFn


@pytest.fixture()
def mockClientUser() -> Union[mock.Mock, ClientUser]:
    clientUser = mock.Mock(spec=ClientUser)
    clientUser.id = 999
    clientUser.name = "BirthdayBot"
    return clientUser


@pytest.fixture()
def mockBot(context: AppContext, mockClientUser: ClientUser) -> mock.Mock:
    bot = mock.Mock()
    bot.context = context
    bot.user = mockClientUser
    bot.guilds = []
    bot.birthday_service = None
    bot.get_channel = mock.Mock(return_value=None)
    bot.get_user = mock.Mock(return_value=None)
    bot.fetch_user = mock.AsyncMock()
    bot.wait_until_ready = mock.AsyncMock()
    bot.change_presence = mock.AsyncMock()
    return bot


@pytest.fixture()
def service(mockBot: mock.Mock) -> BirthdayService:
    birthdayService = BirthdayService(mockBot)
    mockBot.birthday_service = birthdayService
    return birthdayService


@pytest.fixture()
def mockUserWith() -> Callable[..., Union[mock.Mock, User]]:
    def factoryFn(**kwargs) -> Union[mock.Mock, User]:
        user = mock.Mock(spec=User)
        user.id = 1111
        user.name = "ayaka"
        user.send = mock.AsyncMock()
        user.configure_mock(**kwargs)
        user.mention = f"<@{user.id}>"
        return user

    return factoryFn


@pytest.fixture()
def mockUser(mockUserWith: Callable[..., Union[mock.Mock, User]]) -> Union[mock.Mock, User]:
    return mockUserWith()


@pytest.fixture()
def mockTextChannel() -> Union[mock.Mock, TextChannel]:
    channel = mock.Mock(spec=TextChannel)
    channel.id = 4242
    channel.name = "birthdays"
    channel.send = mock.AsyncMock()
    return channel


@pytest.fixture()
def mockInteraction(mockUser: User) -> Union[mock.Mock, Interaction]:
    interaction = mock.Mock()
    interaction.user = mockUser
    interaction.response.is_done = mock.Mock(return_value=False)
    interaction.response.send_message = mock.AsyncMock()
    interaction.followup.send = mock.AsyncMock()
    return interaction


@pytest.fixture()
def forbidden() -> discord.Forbidden:
    return discord.Forbidden(mock.Mock(status=403, reason="Forbidden"), "Cannot send messages to this user")
