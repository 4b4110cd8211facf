"""Tests for the process id source."""

import os
from types import SimpleNamespace
from unittest.mock import patch

import psutil
import pytest

from proctab.collectors.pids import list_pids


def fake_proc(pid, name):
    return SimpleNamespace(info={"pid": pid, "name": name})


class TestListPids:
    """Tests for list_pids."""

    def test_all_pids_sorted(self):
        with patch("proctab.collectors.pids.psutil.pids", return_value=[30, 1, 20]):
            assert list_pids() == [1, 20, 30]

    def test_filter_by_name(self):
        """Test only processes with the given name are listed."""
        procs = [fake_proc(9, "postgres"), fake_proc(2, "bash"), fake_proc(4, "postgres")]
        with patch("proctab.collectors.pids.psutil.process_iter", return_value=procs):
            assert list_pids("postgres") == [4, 9]

    def test_includes_current_process(self):
        assert os.getpid() in list_pids()

    def test_lists_given_root(self, tmp_path):
        """Test the pid directories of another proc tree are listed."""
        for entry in ("424242", "17", "self", "meminfo"):
            (tmp_path / entry).mkdir()

        assert list_pids(procfs_root=tmp_path) == [17, 424242]

    def test_given_root_is_restored(self, tmp_path):
        """Test psutil's proc path is put back after listing another tree."""
        (tmp_path / "5").mkdir()
        previous = psutil.PROCFS_PATH

        list_pids(procfs_root=tmp_path)

        assert psutil.PROCFS_PATH == previous
        assert os.getpid() in list_pids()

    def test_given_root_is_restored_on_error(self, tmp_path):
        previous = psutil.PROCFS_PATH
        with patch("proctab.collectors.pids.psutil.pids", side_effect=OSError("boom")):
            with pytest.raises(OSError):
                list_pids(procfs_root=tmp_path)
        assert psutil.PROCFS_PATH == previous
