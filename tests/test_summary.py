import csv
import io
from datetime import datetime, timezone

import pytest

from nvdtools.vulndb.cve import VulnDBError
from nvdtools.vulndb.summary import SUMMARY_QUERY, SummaryExporter
from nvdtools.vulndb.timeutil import format_time

STAMP = datetime(2018, 9, 6, 17, 29, tzinfo=timezone.utc)


class FakeCursor:
    def __init__(self, db):
        self.db = db

    def execute(self, query, args=()):
        self.db.queries.append((query, list(args)))
        if self.db.error is not None:
            raise self.db.error

    def fetchall(self):
        return list(self.db.rows)

    def close(self):
        self.db.closed += 1


class FakeDB:
    def __init__(self, rows=(), error=None):
        self.rows = list(rows)
        self.error = error
        self.queries = []
        self.closed = 0

    def cursor(self):
        return FakeCursor(self)


ROWS = [
    ("snooze", "test", "current", 1, None, None),
    ("custom_data", "test", "current", 2, STAMP.isoformat(), STAMP),
    ("vendor_data", "test", 7, 3, STAMP, STAMP),
]


def _csv(db, header):
    out = io.StringIO()
    SummaryExporter(db).csv(out, header)
    return list(csv.reader(io.StringIO(out.getvalue())))


def test_summary_records():
    db = FakeDB(ROWS)
    records = SummaryExporter(db).summary_records()
    assert [r.data_type for r in records] == ["snooze", "custom_data", "vendor_data"]
    assert [r.cves for r in records] == [1, 2, 3]
    assert records[2].version == "7"
    assert db.queries[0][0] == SUMMARY_QUERY
    assert db.closed == 1


def test_csv_header():
    rows = _csv(FakeDB(ROWS), header=True)
    assert rows[0] == [
        "data_type",
        "provider",
        "version",
        "cves",
        "published",
        "modified",
    ]
    assert len(rows) == 4


def test_csv_rows():
    rows = _csv(FakeDB(ROWS), header=False)
    assert [r[0] for r in rows] == ["snooze", "custom_data", "vendor_data"]
    assert rows[0][4] == format_time(None)
    assert rows[1][4] == "2018-09-06T17:29Z"
    assert rows[1][4] == rows[2][5]
    assert rows[2][2:4] == ["7", "3"]


def test_csv_contains_custom_data():
    out = io.StringIO()
    SummaryExporter(FakeDB(ROWS)).csv(out, False)
    assert "custom_data" in out.getvalue()


def test_empty_database():
    assert _csv(FakeDB([]), header=False) == []


def test_query_failure():
    db = FakeDB(error=RuntimeError("boom"))
    with pytest.raises(VulnDBError, match="cannot query summary data"):
        SummaryExporter(db).summary_records()
    assert db.closed == 1