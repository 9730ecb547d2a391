"""Tests for the end-to-end pipeline."""

from ipaddress import IPv4Address

from iptally.errors import ErrorKind
from iptally.models import ParameterSet
from iptally.pipeline import run, run_from_sources


def test_full_run(sample_log, tmp_path):
    out = tmp_path / "report.txt"
    result = run(ParameterSet(str(sample_log), str(out)))

    assert result.ok
    assert result.kind is None
    assert result.counts == {IPv4Address("203.0.113.5"): 2, IPv4Address("198.51.100.2"): 1}
    assert out.read_text() == "203.0.113.5 - 2\n198.51.100.2 - 1\n"


def test_runs_are_byte_identical(sample_log, tmp_path):
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    run(ParameterSet(str(sample_log), str(first)))
    run(ParameterSet(str(sample_log), str(second)))

    assert first.read_bytes() == second.read_bytes()


def test_exact_filter_run(sample_log, tmp_path):
    out = tmp_path / "report.txt"
    result = run(ParameterSet(str(sample_log), str(out), IPv4Address("198.51.100.2")))

    assert result.ok
    assert out.read_text() == "198.51.100.2 - 1\n"


def test_mask_filter_run(sample_log, tmp_path):
    out = tmp_path / "report.txt"
    params = ParameterSet(str(sample_log), str(out), IPv4Address("198.51.100.0"), "255.255.255.0")

    assert run(params).ok
    assert out.read_text() == "203.0.113.5 - 2\n198.51.100.2 - 1\n"


def test_invalid_mask_is_reported(sample_log, tmp_path):
    params = ParameterSet(str(sample_log), str(tmp_path / "report.txt"), IPv4Address("198.51.100.0"), "bogus")
    result = run(params)

    assert not result.ok
    assert result.kind is ErrorKind.INVALID_MASK
    assert result.counts is None


def test_missing_input_is_reported(tmp_path):
    result = run(ParameterSet(str(tmp_path / "absent.log"), str(tmp_path / "report.txt")))

    assert result.kind is ErrorKind.IO
    assert not (tmp_path / "report.txt").exists()


def test_run_from_sources(sample_log, tmp_path):
    out = tmp_path / "report.txt"
    env = {"LOG_FILE_PATH": str(sample_log)}
    config = {"outputFilePath": str(out)}

    result = run_from_sources(["--address-start", "203.0.113.5"], config, env)
    assert result.ok
    assert result.params.log_file_path == str(sample_log)
    assert out.read_text() == "203.0.113.5 - 2\n"


def test_resolution_failure_is_a_result():
    result = run_from_sources(["--file-log", "x.log", "--file-output", "y.txt", "--address-mask", "255.0.0.0"], {}, {})

    assert result.kind is ErrorKind.INCONSISTENT_FILTER
    assert result.params is None
