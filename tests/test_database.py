from datetime import date
from pathlib import Path

import pytest

from birthdaybot.core.constants import SENTINEL_YEAR
from birthdaybot.services.database import BirthdayRecord, Database, DatabaseUnavailableError
from birthdaybot.utils.dates import parse_birthday, to_epoch


def epochOf(dateStr: str) -> int:
    return to_epoch(parse_birthday(dateStr))


class TestSetBirthday:
    def testInsert(self, db: Database):
        assert db.set_birthday("1111", epochOf("Jun 06"))

        record = db.get_birthday("1111")
        assert record == BirthdayRecord(user_id="1111", birthdate=epochOf("Jun 06"))
        assert db.get_birthday_count() == 1

    def testUpsertKeepsOneRecord(self, db: Database):
        assert db.set_birthday("1111", epochOf("Jun 06"))
        assert db.set_birthday("1111", epochOf("Jul 07"))

        assert db.get_birthday_count() == 1
        record = db.get_birthday("1111")
        assert record is not None
        assert (record.month, record.day) == (7, 7)

    def testSameValueTwice(self, db: Database):
        assert db.set_birthday("1111", epochOf("Jun 06"))
        assert db.set_birthday("1111", epochOf("Jun 06"))
        assert db.get_birthday_count() == 1

    def testUsersAreIndependent(self, db: Database):
        assert db.set_birthday("1111", epochOf("Jun 06"))
        assert db.set_birthday("2222", epochOf("Jul 07"))

        assert db.get_birthday_count() == 2
        assert db.get_birthday("1111").day == 6
        assert db.get_birthday("2222").day == 7

    def testStrictSchemaRejectsText(self, db: Database):
        assert not db.set_birthday("1111", "not a number")
        assert db.get_birthday("1111") is None

    def testFailedWriteReturnsFalse(self, db: Database):
        with db._get_conn() as conn:
            conn.execute("DROP TABLE users")

        assert not db.set_birthday("1111", epochOf("Jun 06"))


class TestFindBirthdaysOn:
    def testMatchesMonthAndDayOnly(self, db: Database):
        db.set_birthday("1111", epochOf("Jun 06"))
        db.set_birthday("2222", epochOf("Jun 06"))
        db.set_birthday("3333", epochOf("Jun 07"))
        db.set_birthday("4444", epochOf("Jul 06"))

        found = db.find_birthdays_on(6, 6)
        assert [record.user_id for record in found] == ["1111", "2222"]

        assert [record.user_id for record in db.find_birthdays_on(6, 7)] == ["3333"]
        assert [record.user_id for record in db.find_birthdays_on(7, 6)] == ["4444"]

    def testNoMatch(self, db: Database):
        db.set_birthday("1111", epochOf("Jun 06"))
        assert db.find_birthdays_on(6, 7) == []

    def testUpdatedBirthdayMovesDay(self, db: Database):
        db.set_birthday("1111", epochOf("Jun 06"))
        db.set_birthday("1111", epochOf("Jul 07"))

        assert db.find_birthdays_on(6, 6) == []
        assert [record.user_id for record in db.find_birthdays_on(7, 7)] == ["1111"]

    def testLeapDay(self, db: Database):
        db.set_birthday("1111", epochOf("Feb 29"))

        assert [record.user_id for record in db.find_birthdays_on(2, 29)] == ["1111"]
        assert db.find_birthdays_on(2, 28) == []
        assert db.find_birthdays_on(3, 1) == []

    def testErrorReturnsEmpty(self, db: Database):
        with db._get_conn() as conn:
            conn.execute("DROP TABLE users")

        assert db.find_birthdays_on(6, 6) == []


class TestBirthdayRecord:
    def testFields(self):
        record = BirthdayRecord(user_id="1111", birthdate=epochOf("Jun 06"))
        assert record.birthday == date(SENTINEL_YEAR, 6, 6)
        assert record.month == 6
        assert record.day == 6
        assert record.display == "June 6th"


class TestHealth:
    def testPersistsAcrossInstances(self, db: Database):
        db.set_birthday("1111", epochOf("Jun 06"))

        reopened = Database(db.dsn)
        assert reopened.get_birthday("1111") is not None

    def testCreatesParentDirectory(self, tmp_path: Path):
        dsn = tmp_path / "data" / "nested" / "birthdays.db"
        database = Database(str(dsn))

        assert database.is_healthy
        assert dsn.exists()

    def testCorruptedFile(self, tmp_path: Path):
        dsn = tmp_path / "birthdays.db"
        dsn.write_bytes(b"this is not a sqlite database " * 100)

        database = Database(str(dsn))

        assert not database.is_healthy
        assert database.corruption_reason
        assert list(tmp_path.glob("birthdays.db.corrupted.*"))
        with pytest.raises(RuntimeError):
            database.require_healthy()

    def testUnhealthyRejectsOperations(self, db: Database):
        db._mark_unhealthy("test")

        with pytest.raises(DatabaseUnavailableError):
            with db._get_conn():
                pass

        assert not db.set_birthday("1111", epochOf("Jun 06"))
        assert db.find_birthdays_on(6, 6) == []
        assert db.get_birthday("1111") is None
        assert db.get_birthday_count() == 0
