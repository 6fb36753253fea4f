"""Typed records for the league API payloads and the values derived from them.

Payloads are validated once, when they are turned into these records, so the rest of
the tool can index fields without defensive lookups.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

TeamId = Union[int, str]


class MalformedDataError(ValueError):
    """A JSON document does not have the shape the tool expects."""


def _require(data: Any, key: str, where: str):
    if not isinstance(data, dict):
        raise MalformedDataError(f'{where}: expected an object, got {type(data).__name__}')
    if key not in data:
        raise MalformedDataError(f'{where}: missing {key!r}')
    return data[key]


def _require_list(data: Any, key: str, where: str) -> list:
    value = _require(data, key, where)
    if not isinstance(value, list):
        raise MalformedDataError(f'{where}: {key!r} should be a list, got {type(value).__name__}')
    return value


def _require_int(data: Any, key: str, where: str) -> int:
    value = _require(data, key, where)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedDataError(f'{where}: {key!r} is not an integer: {value!r}') from None


@dataclass(frozen=True)
class Connoisseur:
    player_id: str
    user_name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Connoisseur':
        player_id = _require(data, 'playerID', 'connoisseur')
        user_name = _require(data, 'userName', 'connoisseur')
        return cls(player_id=str(player_id), user_name=str(user_name))


@dataclass(frozen=True)
class RosterPage:
    """One page of the `/{game}/Connoisseurs` listing."""

    connoisseurs: List[Connoisseur]
    total: int
    per_page: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RosterPage':
        items = _require_list(data, 'connoisseurs', 'roster page')
        total = _require_int(data, 'total', 'roster page')
        per_page = _require_int(data, 'nbPerPage', 'roster page')
        if per_page <= 0:
            raise MalformedDataError(f'roster page: nbPerPage must be positive, got {per_page}')
        return cls(
            connoisseurs=[Connoisseur.from_dict(item) for item in items],
            total=total,
            per_page=per_page,
        )

    @property
    def remaining_pages(self) -> int:
        return self.total // self.per_page


@dataclass(frozen=True)
class Team:
    team_id: TeamId
    team_name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = 'team') -> 'Team':
        return cls(
            team_id=_require(data, 'teamID', where),
            team_name=_require(data, 'teamName', where),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'teamID': self.team_id, 'teamName': self.team_name}


@dataclass(frozen=True)
class VoteHistoryEntry:
    """A single past vote of a connoisseur."""

    match_id: str
    vote_team_id: Optional[TeamId]
    home_team: Team
    away_team: Team
    winning_team_id: Optional[TeamId] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VoteHistoryEntry':
        match_id = _require(data, 'matchID', 'history entry')
        where = f'history entry {match_id}'
        return cls(
            match_id=str(match_id),
            vote_team_id=_require(data, 'voteTeamID', where),
            home_team=Team.from_dict(_require(data, 'homeTeam', where), f'{where} homeTeam'),
            away_team=Team.from_dict(_require(data, 'awayTeam', where), f'{where} awayTeam'),
            # unplayed matches carry no winner yet
            winning_team_id=data.get('winningTeamID'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matchID': self.match_id,
            'voteTeamID': self.vote_team_id,
            'homeTeam': self.home_team.to_dict(),
            'awayTeam': self.away_team.to_dict(),
            'winningTeamID': self.winning_team_id,
        }

    @property
    def voted_team_name(self) -> str:
        if self.vote_team_id == self.home_team.team_id:
            return self.home_team.team_name
        return self.away_team.team_name

    @property
    def voted_right(self) -> bool:
        return self.winning_team_id is not None and self.vote_team_id == self.winning_team_id


def parse_history(items: Any, where: str = 'history') -> List[VoteHistoryEntry]:
    if not isinstance(items, list):
        raise MalformedDataError(f'{where}: expected a list, got {type(items).__name__}')
    return [VoteHistoryEntry.from_dict(item) for item in items]


@dataclass(frozen=True)
class MatchResult:
    voted: str
    right: bool


# display name -> that player's vote history, in fetch order
Snapshot = Dict[str, List[VoteHistoryEntry]]


def snapshot_to_dict(snapshot: Snapshot) -> Dict[str, List[Dict[str, Any]]]:
    return {name: [entry.to_dict() for entry in history] for name, history in snapshot.items()}


def snapshot_from_dict(data: Any) -> Snapshot:
    """Rebuild a snapshot from its JSON form, keeping the document's key order."""
    if not isinstance(data, dict):
        raise MalformedDataError(f'snapshot: expected an object, got {type(data).__name__}')
    return {str(name): parse_history(items, f'snapshot[{name!r}]') for name, items in data.items()}
