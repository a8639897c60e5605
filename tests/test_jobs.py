import os
import subprocess
import sys
import time

import pytest

from tinysh.jobs import JobError, JobTable


def test_new_table_is_empty():
    table = JobTable()
    assert len(table) == 0
    assert list(table) == []


def test_add_tracks_pid():
    table = JobTable()
    table.add(4242)
    assert 4242 in table
    assert len(table) == 1
    assert list(table) == [4242]


@pytest.mark.parametrize("pid", [0, -1, -300])
def test_add_ignores_non_positive(pid):
    table = JobTable()
    table.add(pid)
    assert len(table) == 0
    assert pid not in table


def test_many_pids_preserve_order():
    table = JobTable()
    pids = list(range(1000, 1025))
    for pid in pids:
        table.add(pid)
    assert list(table) == pids
    assert len(table) == len(pids)


def test_freed_slot_is_reused():
    table = JobTable()
    for pid in (101, 102, 103):
        table.add(pid)
    table.remove(102)
    table.add(104)
    assert list(table) == [101, 104, 103]


def test_remove_missing_raises():
    table = JobTable()
    table.add(55)
    with pytest.raises(JobError):
        table.remove(56)
    assert list(table) == [55]


def test_clear_forgets_everything():
    table = JobTable()
    table.add(7)
    table.add(8)
    table.clear()
    assert len(table) == 0
    assert 7 not in table


def test_reap_drops_non_child():
    table = JobTable()
    table.add(os.getpid())
    assert table.reap() == [os.getpid()]
    assert len(table) == 0


def test_reap_keeps_running_child_then_drops_it():
    proc = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    table = JobTable()
    table.add(proc.pid)
    try:
        assert table.reap() == []
        assert proc.pid in table
    finally:
        proc.kill()
    deadline = time.monotonic() + 10
    reaped = []
    while proc.pid in table and time.monotonic() < deadline:
        reaped.extend(table.reap())
        time.sleep(0.05)
    assert reaped == [proc.pid]
    assert proc.pid not in table