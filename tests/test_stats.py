"""Tests for request counting and ranking."""

from ipaddress import IPv4Address

from iptally.datasources.access_log import read_logs
from iptally.processing.stats import count_requests, rank_counts


def test_count_sample(sample_log):
    counts = count_requests(read_logs(sample_log))
    assert counts == {IPv4Address("203.0.113.5"): 2, IPv4Address("198.51.100.2"): 1}


def test_keys_in_first_seen_order(sample_log):
    counts = count_requests(read_logs(sample_log))
    assert list(counts) == [IPv4Address("203.0.113.5"), IPv4Address("198.51.100.2")]


def test_count_empty():
    assert count_requests([]) == {}


def test_rank_breaks_ties_by_address():
    counts = {
        IPv4Address("10.0.0.20"): 1,
        IPv4Address("10.0.0.3"): 4,
        IPv4Address("10.0.0.100"): 1,
        IPv4Address("10.0.0.9"): 1,
    }
    ranked = [str(a) for a, _ in rank_counts(counts)]
    assert ranked == ["10.0.0.3", "10.0.0.9", "10.0.0.20", "10.0.0.100"]
