from pathlib import Path

import pytest

from birthdaybot.core.config import DEFAULT_LOGS_DIR, Config, ConfigError


BASE_ENV = {"TOKEN": "abc.def", "DSN": "birthdays.db"}


def testMinimal():
    config = Config.from_env(BASE_ENV)

    assert config.TOKEN == "abc.def"
    assert config.DSN == "birthdays.db"
    assert config.GUILD_ID == 0
    assert config.BIRTHDAY_ROLE == ""
    assert config.BIRTHDAY_CHANNEL_ID == 0
    assert config.LOG_DIR == DEFAULT_LOGS_DIR


def testAllValues(tmp_path: Path):
    config = Config.from_env({
        **BASE_ENV,
        "GUILD_ID": "123",
        "BIRTHDAY_ROLE": "456",
        "BIRTHDAY_CHANNEL_ID": " 789 ",
        "LOG_DIR": str(tmp_path),
    })

    assert config.GUILD_ID == 123
    assert config.BIRTHDAY_ROLE == "456"
    assert config.BIRTHDAY_CHANNEL_ID == 789
    assert config.LOG_DIR == tmp_path


def testBlankOptionalValues():
    config = Config.from_env({**BASE_ENV, "GUILD_ID": "", "BIRTHDAY_CHANNEL_ID": "  "})
    assert config.GUILD_ID == 0
    assert config.BIRTHDAY_CHANNEL_ID == 0


@pytest.mark.parametrize("missing", ("TOKEN", "DSN"))
def testMissingRequired(missing: str):
    env = {key: value for key, value in BASE_ENV.items() if key != missing}
    with pytest.raises(ConfigError) as excInfo:
        Config.from_env(env)
    assert missing in str(excInfo.value)


def testBlankRequired():
    with pytest.raises(ConfigError):
        Config.from_env({**BASE_ENV, "TOKEN": "   "})


def testNonNumericId():
    with pytest.raises(ConfigError) as excInfo:
        Config.from_env({**BASE_ENV, "BIRTHDAY_CHANNEL_ID": "general"})
    assert "BIRTHDAY_CHANNEL_ID" in str(excInfo.value)


def testReadsOsEnviron(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TOKEN", "from-env")
    monkeypatch.setenv("DSN", "env.db")
    for key in ("GUILD_ID", "BIRTHDAY_ROLE", "BIRTHDAY_CHANNEL_ID", "LOG_DIR"):
        monkeypatch.delenv(key, raising=False)

    config = Config.from_env()
    assert config.TOKEN == "from-env"
    assert config.DSN == "env.db"


@pytest.mark.parametrize(
    "dsn",
    (
        ":memory:",
        "file::memory:",
        "file::memory:?cache=shared",
        "file:birthdays?mode=memory&cache=shared",
        "file:",
    ),
)
def testInMemoryDsnRejected(dsn: str):
    with pytest.raises(ConfigError) as excInfo:
        Config.from_env({**BASE_ENV, "DSN": dsn})
    assert "DSN" in str(excInfo.value)


@pytest.mark.parametrize("dsn", ("data/birthdays.db", "file:birthdays.db", "file:birthdays.db?mode=rwc"))
def testFileDsnAccepted(dsn: str):
    assert Config.from_env({**BASE_ENV, "DSN": dsn}).DSN == dsn
