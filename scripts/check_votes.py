"""Run the connoisseur vote check from a source checkout (no install needed).

Usage:
  python scripts/check_votes.py <matchId> [game|fetch] [fetch]
"""
import sys
from pathlib import Path

# make src/ importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / 'src') not in sys.path:
    sys.path.insert(0, str(ROOT / 'src'))

from connoisseur_check.cli import main


if __name__ == '__main__':
    raise SystemExit(main())
