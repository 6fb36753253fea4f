"""Snapshot files on disk: locating the current one, naming, writing and reading."""
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import Snapshot, snapshot_from_dict, snapshot_to_dict

TIMESTAMP_FORMAT = '%d-%m-%Y_%H-%M-%S'


def snapshot_filename(game: str, when: datetime) -> str:
    return f"{game}-{when.strftime(TIMESTAMP_FORMAT)}.json"


def parse_snapshot_timestamp(name: str, game: str) -> Optional[datetime]:
    """Return the fetch time encoded in a snapshot filename, or None."""
    stem = name[:-len('.json')] if name.endswith('.json') else name
    if not stem.startswith(f'{game}-'):
        return None
    try:
        return datetime.strptime(stem[len(game) + 1:], TIMESTAMP_FORMAT)
    except ValueError:
        return None


def find_cached_file(game: str, cache_dir: Path) -> Optional[str]:
    """Return the name of the snapshot to use for `game`, or None when there is none.

    Candidates are regular files whose name starts with the game identifier
    (case-sensitive). The newest fetch timestamp wins; names without a readable
    timestamp come after those, in lexicographic order.
    """
    cache_dir = Path(cache_dir)
    if not cache_dir.is_dir():
        return None
    names = sorted(p.name for p in cache_dir.iterdir() if p.is_file() and p.name.startswith(game))
    if not names:
        return None
    stamped = [(parse_snapshot_timestamp(n, game), n) for n in names]
    dated = [(ts, n) for ts, n in stamped if ts is not None]
    if dated:
        return max(dated, key=lambda x: x[0])[1]
    return names[0]


def save_snapshot(snapshot: Snapshot, game: str, cache_dir: Path, when: datetime = None) -> Path:
    cache_dir = Path(cache_dir)
    if not cache_dir.exists():
        print(f"[cache] Creating missing directory: {cache_dir}", file=sys.stderr)
        cache_dir.mkdir(parents=True, exist_ok=True)
    when = when or datetime.now()
    out = cache_dir / snapshot_filename(game, when)
    out.write_text(json.dumps(snapshot_to_dict(snapshot), ensure_ascii=False, indent=2), encoding='utf-8')
    return out


def load_snapshot(path: Path) -> Snapshot:
    """Read a snapshot file. IO, JSON and shape errors propagate to the caller."""
    data = json.loads(Path(path).read_text(encoding='utf-8'))
    return snapshot_from_dict(data)
