"""Command-line interface for Volley Pairing.

This module exposes the team balancer and the pool scheduler to the shell.
Input files are JSON; results are printed to stdout as JSON.
"""

# Volley Pairing
# Copyright (C) 2025  Volley Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from volleypairing.balancing import balance_teams
from volleypairing.constants import DEFAULT_NUM_POOLS
from volleypairing.exceptions import InvalidConfigurationException
from volleypairing.models.player import Participant
from volleypairing.models.tournament import PairingHistory
from volleypairing.tournament import distribute_teams_into_pools, generate_pool_matches
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Value must be at least 1: {number}")
    return number


def _load_json(path: str) -> Any:
    with Path(path).open(encoding="utf-8") as handle:
        return json.load(handle)


def load_roster(path: str) -> List[Participant]:
    """Load participants from a JSON roster file.

    The file holds either a list of participant objects or an object with
    a ``participants`` list.

    Raises:
        InvalidConfigurationException: If the file has another shape
        InvalidPlayerDataException: If a participant entry is invalid
    """
    data = _load_json(path)
    if isinstance(data, dict):
        data = data.get("participants")
    if not isinstance(data, list):
        raise InvalidConfigurationException(
            f"Roster file {path} must contain a list of participants"
        )
    return [Participant.from_dict(entry) for entry in data]


def load_team_ids(path: str) -> List[str]:
    """Load team IDs from a JSON file of IDs or of team objects with an ``id``."""
    data = _load_json(path)
    if isinstance(data, dict):
        data = data.get("teams")
    if not isinstance(data, list):
        raise InvalidConfigurationException(
            f"Teams file {path} must contain a list of teams"
        )
    team_ids = []
    for entry in data:
        if isinstance(entry, dict):
            if "id" not in entry:
                raise InvalidConfigurationException(f"Team without an id: {entry!r}")
            entry = entry["id"]
        team_ids.append(str(entry))
    return team_ids


def run_balance(args: argparse.Namespace) -> int:
    participants = load_roster(args.roster)
    history = None
    if args.history:
        history = PairingHistory.from_dict(_load_json(args.history))
    rng = random.Random(args.seed) if args.seed is not None else None

    teams = balance_teams(
        participants, args.courts, args.team_size, pairing_history=history, rng=rng
    )
    logger.info("Balanced %d participants into %d teams", len(participants), len(teams))
    print(json.dumps([team.to_dict() for team in teams], indent=2))
    return 0


def run_pools(args: argparse.Namespace) -> int:
    team_ids = load_team_ids(args.teams)
    pools = distribute_teams_into_pools(team_ids, args.pools)
    matches = generate_pool_matches(pools, starting_court=args.court)
    logger.info("Scheduled %d pool matches in %d pools", len(matches), len(pools))
    print(json.dumps([match.to_dict() for match in matches], indent=2))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="volley-pairing",
        description="Balance volleyball teams and schedule pool play",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Four teams of three on two courts
  volley-pairing balance roster.json --courts 2 --team-size 4 --seed 7

  # Avoid repeating recent teammates
  volley-pairing balance roster.json --courts 3 --team-size 6 --history history.json

  # Round robin in two pools starting on court 3
  volley-pairing pools teams.json --pools 2 --court 3
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    balance = subparsers.add_parser("balance", help="Split a roster into teams")
    balance.add_argument("roster", help="JSON file with the participants")
    balance.add_argument(
        "--courts", type=_positive_int, required=True, help="Number of courts"
    )
    balance.add_argument(
        "--team-size",
        type=_positive_int,
        required=True,
        help="Preferred number of players per team",
    )
    balance.add_argument(
        "--history", help="JSON file with previous teammate co-occurrences"
    )
    balance.add_argument("--seed", type=int, help="Random seed for reproducibility")
    balance.set_defaults(handler=run_balance)

    pools = subparsers.add_parser("pools", help="Schedule round-robin pool matches")
    pools.add_argument("teams", help="JSON file with the team IDs")
    pools.add_argument(
        "--pools",
        type=_positive_int,
        default=DEFAULT_NUM_POOLS,
        help=f"Number of pools (default: {DEFAULT_NUM_POOLS})",
    )
    pools.add_argument(
        "--court", type=_positive_int, default=1, help="First court number (default: 1)"
    )
    pools.set_defaults(handler=run_pools)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("volleypairing").setLevel(logging.DEBUG)

    try:
        return args.handler(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error("Command %s failed: %s", args.command, e, exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
