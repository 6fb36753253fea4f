"""Console rendering of a match's connoisseur votes."""
from typing import Dict, List

from .models import MatchResult, Snapshot

NO_VOTES_MESSAGE = 'No votes found'


def tally_votes(results: Dict[str, MatchResult]) -> Dict[str, int]:
    """Count votes per team name, in the order team names first appear."""
    counts = {}
    for result in results.values():
        counts[result.voted] = counts.get(result.voted, 0) + 1
    return counts


def render_report(snapshot: Snapshot, results: Dict[str, MatchResult], accuracy: bool = False) -> List[str]:
    # an empty snapshot means nothing was fetched/loaded at all; an empty result
    # set on a populated snapshot still prints the (empty) sections
    if len(snapshot) == 0:
        return [NO_VOTES_MESSAGE]

    lines = ['', 'Connoisseur results:']
    for user_name, result in results.items():
        line = f"{user_name}: {result.voted}"
        if accuracy:
            line += ' (right)' if result.right else ' (wrong)'
        lines.append(line)

    lines += ['', 'Total votes per team:']
    for team, count in tally_votes(results).items():
        lines.append(f"{team}: {count}")

    if accuracy:
        right = sum(1 for r in results.values() if r.right)
        lines.append(f"Right votes: {right}/{len(results)}")
    return lines


def print_report(snapshot: Snapshot, results: Dict[str, MatchResult], accuracy: bool = False):
    for line in render_report(snapshot, results, accuracy=accuracy):
        print(line)
