"""Tests for the command-line interface."""

import json

import pytest

from proctab import __version__
from proctab.cli import build_parser, main

from conftest import add_process


def run(capsys, proc_root, tmp_path, *args):
    """Run the CLI against the fake /proc and return (exit code, stdout)."""
    argv = [
        "--config", str(tmp_path / "absent.json"),
        "--procfs", str(proc_root),
        "--no-verify-mount",
        *args,
    ]
    code = main(argv)
    return code, capsys.readouterr().out


class TestCli:
    """Tests for the proctab command."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_loadavg(self, capsys, proc_root, tmp_path):
        code, out = run(capsys, proc_root, tmp_path, "loadavg")
        assert code == 0
        assert json.loads(out)["last_pid"] == 56789

    def test_memusage(self, capsys, proc_root, tmp_path):
        code, out = run(capsys, proc_root, tmp_path, "memusage")
        assert code == 0
        assert json.loads(out)["memtotal"] == 16314188

    def test_cputime(self, capsys, proc_root, tmp_path):
        code, out = run(capsys, proc_root, tmp_path, "cputime")
        assert code == 0
        assert json.loads(out)["iowait"] == 16683

    def test_procs(self, capsys, proc_root, tmp_path):
        """Test rows are printed for the pids that exist."""
        add_process(proc_root, 11)
        add_process(proc_root, 13, comm="bgwriter")

        code, out = run(capsys, proc_root, tmp_path, "procs", "11", "12", "13")

        assert code == 0
        rows = json.loads(out)
        assert [row["pid"] for row in rows] == [11, 13]
        assert rows[1]["comm"] == "bgwriter"

    def test_all(self, capsys, proc_root, tmp_path):
        add_process(proc_root, 11)

        code, out = run(capsys, proc_root, tmp_path, "all", "11", "--workers", "2")

        assert code == 0
        payload = json.loads(out)
        assert set(payload) == {"loadavg", "memusage", "cputime", "processes"}
        assert payload["processes"][0]["pid"] == 11

    def test_unavailable_interface_exit_code(self, capsys, tmp_path):
        """Test a missing mount is reported with exit code 1 and no output."""
        code, out = run(capsys, tmp_path / "missing", tmp_path, "loadavg")
        assert code == 1
        assert out == ""

    def test_config_file_applied(self, capsys, proc_root, tmp_path):
        """Test settings are read from the config file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"procfs_root": str(proc_root), "verify_mount": False}))

        assert main(["--config", str(config_path), "loadavg"]) == 0
        assert json.loads(capsys.readouterr().out)["load1"] == 0.52

    def test_invalid_config(self, capsys, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"unknown": True}))
        assert main(["--config", str(config_path), "loadavg"]) == 1

    def test_parser_pids_are_ints(self):
        args = build_parser().parse_args(["procs", "1", "2", "--name", "postgres"])
        assert args.pids == [1, 2]
        assert args.name == "postgres"

    def test_procs_without_pids_lists_given_root(self, capsys, proc_root, tmp_path):
        """Test the pid list comes from the --procfs tree, not the host's /proc."""
        add_process(proc_root, 424242)

        code, out = run(capsys, proc_root, tmp_path, "procs")

        assert code == 0
        assert [row["pid"] for row in json.loads(out)] == [424242]
