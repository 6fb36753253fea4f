"""Build a connoisseur snapshot from the remote API.

Requests are issued strictly one after another: the roster pages first, then one
history request per player. A failed item is reported as a SKIPPED outcome and left
out; nothing is retried and no single failure aborts the run.
"""
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterator, List, Optional

from . import config
from .api import ApiError, LeagueClient
from .cache import save_snapshot
from .models import Connoisseur, MalformedDataError, Snapshot

FETCH_ERRORS = (ApiError, MalformedDataError)


class OutcomeKind(Enum):
    OK = 'ok'
    SKIPPED = 'skipped'


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    label: str
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, label: str, value: Any) -> 'Outcome':
        return cls(OutcomeKind.OK, label, value=value)

    @classmethod
    def skipped(cls, label: str, reason: str) -> 'Outcome':
        return cls(OutcomeKind.SKIPPED, label, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK


def log_skipped(outcome: Outcome):
    print(f"[aggregator] Error fetching {outcome.label}: {outcome.reason}", file=sys.stderr)


def iter_roster_pages(client: LeagueClient, game: str) -> Iterator[Outcome]:
    """Yield one outcome per roster page; an OK value is that page's connoisseurs.

    When the first page fails nothing else is requested.
    """
    try:
        first = client.get_connoisseurs(game)
    except FETCH_ERRORS as e:
        yield Outcome.skipped('initial connoisseurs', str(e))
        return
    yield Outcome.ok('initial connoisseurs', first.connoisseurs)

    pos_min = first.per_page + 1
    for i in range(first.remaining_pages):
        label = f'page {i + 1}'
        try:
            page = client.get_connoisseurs(game, pos_min=pos_min)
        except FETCH_ERRORS as e:
            yield Outcome.skipped(label, str(e))
        else:
            yield Outcome.ok(label, page.connoisseurs)
        pos_min += first.per_page


def iter_histories(client: LeagueClient, roster: List[Connoisseur]) -> Iterator[Outcome]:
    """Yield one outcome per player, in roster order, labelled with the display name."""
    for player in roster:
        try:
            history = client.get_connoisseur_history(player.player_id)
        except FETCH_ERRORS as e:
            yield Outcome.skipped(f'history for player {player.player_id}', str(e))
        else:
            yield Outcome.ok(player.user_name, history)


def fetch_roster(client: LeagueClient, game: str,
                 on_skip: Callable[[Outcome], None] = log_skipped) -> List[Connoisseur]:
    roster = []
    for outcome in iter_roster_pages(client, game):
        if outcome.is_ok:
            roster.extend(outcome.value)
        else:
            on_skip(outcome)
    return roster


def fetch_histories(client: LeagueClient, roster: List[Connoisseur],
                    on_skip: Callable[[Outcome], None] = log_skipped) -> Snapshot:
    snapshot = {}
    for outcome in iter_histories(client, roster):
        if outcome.is_ok:
            snapshot[outcome.label] = outcome.value
        else:
            on_skip(outcome)
    return snapshot


def fetch_snapshot(game: str, cache_dir: Path = None, client: LeagueClient = None,
                   on_skip: Callable[[Outcome], None] = log_skipped,
                   clock: Callable[[], datetime] = datetime.now) -> Snapshot:
    """Fetch every connoisseur's history for `game`, persist it and return it.

    The snapshot is written with the wall-clock time taken after the last request.
    The returned mapping is the in-memory one, not a re-read of the file.
    """
    cache_dir = Path(cache_dir) if cache_dir is not None else config.CACHE_DIR
    own_client = client is None
    client = client or LeagueClient()
    try:
        print(f"[aggregator] Getting {game} connoisseurs", file=sys.stderr)
        roster = fetch_roster(client, game, on_skip=on_skip)
        print(f"[aggregator] {game} connoisseurs found: {len(roster)}", file=sys.stderr)
        print('[aggregator] Fetching connoisseur history... (This will take a while)', file=sys.stderr)
        snapshot = fetch_histories(client, roster, on_skip=on_skip)
    finally:
        if own_client:
            client.close()

    out = save_snapshot(snapshot, game, cache_dir, when=clock())
    print(f"[aggregator] Wrote snapshot with {len(snapshot)} players to {out}", file=sys.stderr)
    return snapshot
