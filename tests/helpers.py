"""Shared fakes and payload factories for the connoisseur_check tests.

FakeSession stands in for requests.Session: it serves canned payloads keyed by
path (plus query string) and records every request in order.
"""

from urllib.parse import urlencode

import requests

from connoisseur_check.api import LeagueClient

BASE_URL = 'https://api.test'


class FakeResponse:
    def __init__(self, payload=None, status_code=200, url=''):
        self._payload = payload
        self.status_code = status_code
        self.url = url

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error for url: {self.url}', response=self)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Routes map '/path' or '/path?query' to a payload or an int status.

    A requests exception is raised from get(); any other exception is raised
    from the response's json(), like an unparsable body.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        key = f'{path}?{urlencode(params)}' if params else path
        self.calls.append(key)
        route = self.routes.get(key, 404)
        if isinstance(route, requests.RequestException):
            raise route
        if isinstance(route, int):
            return FakeResponse({'error': 'nope'}, status_code=route, url=url)
        return FakeResponse(route, url=url)

    def close(self):
        self.closed = True


def make_client(routes=None):
    session = FakeSession(routes)
    return LeagueClient(base_url=BASE_URL, session=session), session


def make_connoisseur(player_id, user_name=None):
    return {'playerID': player_id, 'userName': user_name or f'user-{player_id}'}


def make_roster_page(connoisseurs, total=None, per_page=10):
    return {
        'connoisseurs': list(connoisseurs),
        'total': len(connoisseurs) if total is None else total,
        'nbPerPage': per_page,
    }


def make_entry(match_id='M1', vote=5, home=(5, 'Red'), away=(9, 'Blue'), winner=5):
    return {
        'matchID': match_id,
        'voteTeamID': vote,
        'homeTeam': {'teamID': home[0], 'teamName': home[1]},
        'awayTeam': {'teamID': away[0], 'teamName': away[1]},
        'winningTeamID': winner,
    }


def make_player_payload(entries):
    return {'connoisseurHistory': list(entries)}
