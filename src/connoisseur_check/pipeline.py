"""One invocation of the checker: locate -> fetch or load -> resolve -> print."""
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from . import config
from .aggregator import fetch_snapshot
from .api import LeagueClient
from .cache import find_cached_file, load_snapshot
from .models import MatchResult, Snapshot
from .report import print_report
from .resolver import resolve_match


@dataclass(frozen=True)
class CheckRequest:
    """Everything a run needs; built by the CLI, threaded through each stage."""

    match_id: str
    game: str = config.DEFAULT_GAME
    force_fetch: bool = False
    cache_dir: Path = field(default_factory=lambda: config.CACHE_DIR)
    api_base: Optional[str] = None
    accuracy: bool = False


def obtain_snapshot(request: CheckRequest, client: LeagueClient = None) -> Snapshot:
    """Load the current cached snapshot, or fetch a new one when forced or none exists."""
    cached_name = find_cached_file(request.game, request.cache_dir)
    fetch = request.force_fetch
    if cached_name is None and not fetch:
        print(f"[connoisseur_check] No cached file found for game '{request.game}'. Fetching new data...",
              file=sys.stderr)
        fetch = True

    if fetch:
        if client is not None:
            return fetch_snapshot(request.game, request.cache_dir, client=client)
        with LeagueClient(base_url=request.api_base) as own_client:
            return fetch_snapshot(request.game, request.cache_dir, client=own_client)

    path = Path(request.cache_dir) / cached_name
    print(f"[cache] Using cached snapshot {path}", file=sys.stderr)
    return load_snapshot(path)


def run(request: CheckRequest, client: LeagueClient = None) -> Dict[str, MatchResult]:
    snapshot = obtain_snapshot(request, client=client)
    print(f"[connoisseur_check] Checking {len(snapshot)} players for votes", file=sys.stderr)
    results = resolve_match(snapshot, request.match_id)
    print_report(snapshot, results, accuracy=request.accuracy)
    return results
