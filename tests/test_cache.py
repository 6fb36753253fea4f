"""Cache locator and snapshot file helpers."""

import json
from datetime import datetime

import pytest

from connoisseur_check.cache import (
    find_cached_file,
    load_snapshot,
    parse_snapshot_timestamp,
    save_snapshot,
    snapshot_filename,
)
from connoisseur_check.models import MalformedDataError, VoteHistoryEntry
from helpers import make_entry


def _touch(directory, *names):
    for name in names:
        (directory / name).write_text('{}', encoding='utf-8')


def test_missing_directory_is_not_found(tmp_path):
    assert find_cached_file('vail', tmp_path / 'does-not-exist') is None


def test_no_prefix_match_is_not_found(tmp_path):
    _touch(tmp_path, 'onward-1-1-2024_00-00-00.json', 'notes.txt', 'Vail-x.json')
    assert find_cached_file('vail', tmp_path) is None


def test_first_lexicographic_match_without_timestamps(tmp_path):
    _touch(tmp_path, 'onward-y.json', 'onward-x.json', 'pavlov-a.json')
    assert find_cached_file('onward', tmp_path) == 'onward-x.json'


def test_newest_timestamp_wins(tmp_path):
    _touch(
        tmp_path,
        'vail-02-03-2024_10-00-00.json',
        'vail-01-12-2023_23-59-59.json',
        'vail-15-02-2024_08-30-00.json',
        'vail-junk.json',
    )
    assert find_cached_file('vail', tmp_path) == 'vail-02-03-2024_10-00-00.json'


def test_directories_are_ignored(tmp_path):
    (tmp_path / 'vail-folder').mkdir()
    assert find_cached_file('vail', tmp_path) is None


def test_snapshot_filename_format():
    when = datetime(2024, 3, 7, 9, 5, 4)
    assert snapshot_filename('breachers', when) == 'breachers-07-03-2024_09-05-04.json'
    assert parse_snapshot_timestamp('breachers-07-03-2024_09-05-04.json', 'breachers') == when
    assert parse_snapshot_timestamp('breachers-latest.json', 'breachers') is None


def test_save_creates_directory_and_writes_indented_json(tmp_path):
    cache_dir = tmp_path / 'cached'
    snapshot = {'Alice': [VoteHistoryEntry.from_dict(make_entry())]}

    out = save_snapshot(snapshot, 'vail', cache_dir, when=datetime(2024, 1, 2, 3, 4, 5))

    assert out == cache_dir / 'vail-02-01-2024_03-04-05.json'
    text = out.read_text(encoding='utf-8')
    assert text.startswith('{\n  "Alice": [\n')
    assert json.loads(text) == {'Alice': [make_entry()]}


def test_load_snapshot_roundtrip(tmp_path):
    snapshot = {'Bob': [VoteHistoryEntry.from_dict(make_entry(match_id='M7'))], 'Eve': []}
    out = save_snapshot(snapshot, 'pavlov', tmp_path)

    assert load_snapshot(out) == snapshot


def test_load_snapshot_propagates_parse_errors(tmp_path):
    bad = tmp_path / 'vail-bad.json'
    bad.write_text('{not json', encoding='utf-8')
    with pytest.raises(json.JSONDecodeError):
        load_snapshot(bad)

    wrong_shape = tmp_path / 'vail-list.json'
    wrong_shape.write_text('[1, 2]', encoding='utf-8')
    with pytest.raises(MalformedDataError):
        load_snapshot(wrong_shape)
