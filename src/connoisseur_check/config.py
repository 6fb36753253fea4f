"""Runtime configuration.

Values come from the environment, optionally seeded from a `.env` file at the
repository root or in the current working directory (real environment variables win).
"""
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]
for env_path in (ROOT / '.env', Path.cwd() / '.env'):
    if env_path.exists():
        load_dotenv(env_path)

VALID_GAMES = ('vail', 'breachers', 'onward', 'pavlov')
DEFAULT_GAME = VALID_GAMES[0]
FETCH_KEYWORD = 'fetch'

API_BASE = os.environ.get('CONNOISSEUR_API_BASE', 'https://api.vrmasterleague.com').rstrip('/')
CACHE_DIR = Path(os.environ.get('CONNOISSEUR_CACHE_DIR') or 'cached')


def _parse_timeout(raw):
    if raw is None or not str(raw).strip():
        return None
    try:
        return float(raw)
    except ValueError:
        print(f"[config] ignoring invalid CONNOISSEUR_HTTP_TIMEOUT={raw!r}", file=sys.stderr)
        return None


# None leaves requests without a timeout
HTTP_TIMEOUT = _parse_timeout(os.environ.get('CONNOISSEUR_HTTP_TIMEOUT'))
