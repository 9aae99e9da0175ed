from unittest.mock import Mock

import pytest

from jobkernel import JobHandle, JobStatus
from jobkernel._internal.table import JobTable
from jobkernel.exceptions import JobNotFoundError


def test_register_and_lookup() -> None:
    table = JobTable()
    record = table.register(name="j", execution=Mock(), pass_in=(1, 2))

    assert record.handle == JobHandle(0, 0)
    assert record.status is JobStatus.READY
    assert record.pass_in == (1, 2)
    assert record.pass_out == ()
    assert table.lookup(record.handle) is record
    assert record.handle in table
    assert len(table) == 1
    expected = "JobRecord(handle=JobHandle(0:0), name='j', status=ready)"
    assert repr(record) == expected


def test_stale_handle_never_resolves_to_new_job() -> None:
    table = JobTable()
    old = table.register(name="old", execution=Mock())
    assert table.delete(old.handle) is True

    new = table.register(name="new", execution=Mock())

    assert new.handle.index == old.handle.index
    assert new.handle != old.handle
    assert table.get(old.handle) is None
    assert table.get(new.handle) is new
    assert table.delete(old.handle) is False


def test_lookup_unknown_handle() -> None:
    table = JobTable()
    handle = JobHandle(7, 0)
    assert table.get(handle) is None
    with pytest.raises(JobNotFoundError, match="No job is registered"):
        _ = table.lookup(handle)


def test_iteration_skips_free_slots() -> None:
    table = JobTable()
    first = table.register(name="a", execution=Mock())
    second = table.register(name="b", execution=Mock(), callback=print)
    _ = table.delete(first.handle)

    assert [record.name for record in table] == ["b"]
    assert len(table) == 1
    info = second.info()
    assert info.name == "b"
    assert info.has_callback is True
