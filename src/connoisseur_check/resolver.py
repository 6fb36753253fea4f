from typing import Dict

from .models import MatchResult, Snapshot


def resolve_match(snapshot: Snapshot, match_id: str) -> Dict[str, MatchResult]:
    """Map each player who voted on `match_id` to the team they picked.

    Players without an entry for the match are left out. If a history holds the
    match twice the first entry is used.
    """
    results = {}
    for user_name, history in snapshot.items():
        entry = next((e for e in history if e.match_id == match_id), None)
        if entry is None:
            continue
        results[user_name] = MatchResult(voted=entry.voted_team_name, right=entry.voted_right)
    return results
