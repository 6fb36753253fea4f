"""Minimal client for the VR Master League public API (read-only endpoints)."""
from typing import Any, Dict, List, Optional

import requests

from . import __version__, config
from .models import MalformedDataError, RosterPage, VoteHistoryEntry, parse_history


class ApiError(Exception):
    """A request failed at the transport level or returned a non-success status."""

    def __init__(self, message: str, url: str, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class LeagueClient:
    """Wraps a `requests.Session`; pass `session` to reuse or fake one."""

    def __init__(self, base_url: str = None, session=None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.API_BASE).rstrip('/')
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        if self._owns_session:
            self.session.headers.update({
                'Accept': 'application/json',
                'User-Agent': f'connoisseur-check/{__version__}',
            })

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        if self._owns_session:
            self.session.close()

    def _get_json(self, path: str, params: Dict[str, Any] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ApiError(f'GET {url} failed, status: {status}', url, status) from e
        except requests.RequestException as e:
            raise ApiError(f'GET {url} failed: {e}', url) from e
        try:
            return r.json()
        except ValueError as e:
            raise MalformedDataError(f'GET {url} returned invalid JSON: {e}') from e

    def get_connoisseurs(self, game: str, pos_min: Optional[int] = None) -> RosterPage:
        """Fetch one roster page; the first page when `pos_min` is None."""
        params = {'posMin': pos_min} if pos_min is not None else None
        return RosterPage.from_dict(self._get_json(f'/{game}/Connoisseurs', params=params))

    def get_connoisseur_history(self, player_id: str) -> List[VoteHistoryEntry]:
        data = self._get_json(f'/Players/{player_id}')
        if not isinstance(data, dict) or 'connoisseurHistory' not in data:
            raise MalformedDataError(f'player {player_id}: missing connoisseurHistory')
        return parse_history(data['connoisseurHistory'], f'player {player_id} history')
