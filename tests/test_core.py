import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import io
import random
import pytest

import utils
from utils import format_rate
import bench
from bench import random_path_keys, random_string_keys, run_bench
from fuzzy_trie import FuzzyTrie
from segmenter import path_segmenter


def test_log_with_time(monkeypatch):
    utils.start_time = 0
    out = io.StringIO()
    monkeypatch.setattr('sys.stdout', out)
    utils.log_with_time('Test message', color='')
    assert 'Test message' in out.getvalue()


def test_log_with_time_starts_clock(monkeypatch):
    monkeypatch.setattr(utils, 'start_time', None)
    out = io.StringIO()
    monkeypatch.setattr('sys.stdout', out)
    utils.log_with_time('first line')
    assert utils.start_time is not None
    assert '[00:00' in out.getvalue()


def test_vlog_quiet_unless_verbose(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr('sys.stdout', out)
    monkeypatch.setattr(utils, 'VERBOSE', False)
    utils.vlog('hidden')
    assert out.getvalue() == ''
    monkeypatch.setattr(utils, 'VERBOSE', True)
    utils.start_time = 0
    utils.vlog('shown', t0=0)
    assert 'shown (took' in out.getvalue()


def test_trie_logs_rejections_when_verbose(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr('sys.stdout', out)
    monkeypatch.setattr(utils, 'VERBOSE', True)
    utils.start_time = 0
    trie = FuzzyTrie()
    assert not trie.put('/a*', 1)
    trie.put('/a/1', 1)
    trie.delete('/a/*')
    text = out.getvalue()
    assert "wildcard segment '/a*'" in text
    assert 'removed 1 children' in text


def test_format_rate():
    assert format_rate(1.0, 0) == 'n/a'
    assert format_rate(2.0, 1000) == '2.000 ms/op'
    assert format_rate(0.5, 100_000) == '5.000 us/op'
    assert format_rate(0.001, 10_000) == '100.0 ns/op'


def test_random_keys_shape():
    rng = random.Random(3)
    keys = random_string_keys(rng, 5, 12)
    assert len(keys) == 5
    assert all(len(k) == 12 and '*' not in k and '/' not in k for k in keys)
    paths = random_path_keys(rng, 5, 3, 4)
    for key in paths:
        part, i = path_segmenter(key, 0)
        parts = [part]
        while i != -1:
            part, i = path_segmenter(key, i)
            parts.append(part)
        assert len(parts) == 3
        assert all(len(p) == 5 for p in parts)


def test_run_bench_small(monkeypatch):
    monkeypatch.setattr('sys.stdout', io.StringIO())
    results = run_bench(['--keys', '10', '--iterations', '50', '--seed', '1'])
    names = [name for name, _, _ in results]
    assert names == [
        'FuzzyTriePutStringKey',
        'FuzzyTrieGetStringKey',
        'FuzzyTriePutPathKey',
        'FuzzyTrieGetPathKey',
    ]
    assert all(ops == 50 and elapsed >= 0 for _, elapsed, ops in results)


def test_run_bench_path_only(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr('sys.stdout', out)
    results = run_bench(['--mode', 'path', '--keys', '3', '--iterations', '9'])
    assert [name for name, _, _ in results] == ['FuzzyTriePutPathKey', 'FuzzyTrieGetPathKey']
    assert 'BENCHMARK REPORT' in out.getvalue()


def test_run_bench_rejects_zero_keys(monkeypatch):
    monkeypatch.setattr('sys.stderr', io.StringIO())
    with pytest.raises(SystemExit):
        run_bench(['--keys', '0'])


def test_bench_defaults_match_key_sets():
    assert bench.NUM_KEYS == 1000
    assert bench.BYTES_PER_KEY == 30
    assert bench.PARTS_PER_KEY == 3
    assert bench.BYTES_PER_PART == 10
