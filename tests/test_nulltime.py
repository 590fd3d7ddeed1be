from datetime import datetime, timezone

from nvdtools.sqlutil.nulltime import NullTime


def test_default_is_null():
    nt = NullTime()
    assert nt.valid is False
    assert nt.value() is None


def test_scan_datetime_round_trip():
    moment = datetime(2018, 9, 6, 17, 29, tzinfo=timezone.utc)
    nt = NullTime()
    nt.scan(moment)
    assert nt.valid is True
    assert nt.time == moment
    assert nt.value() == moment


def test_scan_none_is_null():
    nt = NullTime(time=datetime(2018, 9, 6, 17, 29), valid=True)
    nt.scan(None)
    assert nt.valid is False
    assert nt.value() is None


def test_scan_non_datetime_is_null():
    nt = NullTime()
    nt.scan("2018-09-06T17:29Z")
    assert nt.valid is False
    assert nt.time is None


def test_invalid_hides_time():
    moment = datetime(2018, 9, 6, 17, 30)
    nt = NullTime(time=moment, valid=False)
    assert nt.value() is None
    nt.valid = True
    assert nt.value() == moment