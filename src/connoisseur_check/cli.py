"""Check which team the league's connoisseurs voted for in a match.

Usage:
  connoisseur-check <matchId> [game|fetch] [fetch]

  # votes for a vail match, from the newest cached snapshot (fetched if none exists)
  connoisseur-check 6fHt2yQ...

  # onward match, forcing a fresh download of every connoisseur history
  connoisseur-check 6fHt2yQ... onward fetch

Snapshots are written to CONNOISSEUR_CACHE_DIR (default ./cached). Settings can be
put in a .env file at the repository root.
"""
import argparse
import sys
from pathlib import Path

from . import config
from .pipeline import CheckRequest, run


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    # positionals are taken from the leftover tokens so match ids like "-Xy3kQ"
    # are not mistaken for options; no short options may be registered here
    p = UsageParser(
        prog='connoisseur-check',
        usage='%(prog)s <matchId> [game|fetch] [fetch] [options]',
        description='Tally connoisseur votes for a VR Master League match. '
                    f"game is one of {', '.join(config.VALID_GAMES)} (default {config.DEFAULT_GAME}); "
                    f"'{config.FETCH_KEYWORD}' forces a refetch.",
        add_help=False,
    )
    p.add_argument('--help', action='help', help='show this help message and exit')
    p.add_argument('--cache-dir', type=Path, default=None, help='snapshot directory (overrides CONNOISSEUR_CACHE_DIR)')
    p.add_argument('--api-base', default=None, help='API base URL (overrides CONNOISSEUR_API_BASE)')
    p.add_argument('--accuracy', action='store_true', help='mark each vote right/wrong and print a summary')
    return p


def parse_args(argv=None) -> argparse.Namespace:
    """Parse options, then fill match_id / target / refetch from the remaining tokens in order.

    Tokens past the third are kept in `extra` and ignored. Unknown `--long` options are usage errors.
    """
    parser = build_parser()
    args, tokens = parser.parse_known_args(argv)
    tokens = [t for t in tokens if t != '--']
    unknown = [t for t in tokens if t.startswith('--')]
    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")
    args.match_id, args.target, args.refetch = (tokens + [None] * 3)[:3]
    args.extra = tokens[3:]
    return args


def request_from_args(args) -> CheckRequest:
    """Turn parsed arguments into a CheckRequest; raises ValueError on usage errors."""
    if not args.match_id:
        raise ValueError('You must provide a match ID.')

    game = config.DEFAULT_GAME
    force_fetch = False
    if args.target:
        if args.target == config.FETCH_KEYWORD:
            force_fetch = True
        elif args.target in config.VALID_GAMES:
            game = args.target
        else:
            raise ValueError(f"Invalid game '{args.target}'. Valid games are: {', '.join(config.VALID_GAMES)}")
    if args.refetch == config.FETCH_KEYWORD:
        force_fetch = True

    return CheckRequest(
        match_id=args.match_id,
        game=game,
        force_fetch=force_fetch,
        cache_dir=args.cache_dir if args.cache_dir is not None else config.CACHE_DIR,
        api_base=args.api_base,
        accuracy=args.accuracy,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        request = request_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        run(request)
    except Exception as e:
        # per-item fetch failures never get here; cache read/parse and snapshot write errors do
        print(f"[connoisseur_check] Error processing connoisseurs: {e}", file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
