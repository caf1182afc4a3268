"""Volley Pairing: balanced volleyball teams and competition scheduling."""

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

from volleypairing.balancing import (
    BalancerConfig,
    TeamBalancer,
    balance_teams,
    swap_players,
)
from volleypairing.exceptions import VolleyPairingException
from volleypairing.models import Participant, Team, TeamSkillAverages
from volleypairing.models.tournament import (
    ClassicFormat,
    KothFormat,
    Match,
    MatchStatus,
    PairingHistory,
    Standing,
)
from volleypairing.tournament import CompetitionEngine

__version__ = "0.1.0"

__all__ = [
    "BalancerConfig",
    "ClassicFormat",
    "CompetitionEngine",
    "KothFormat",
    "Match",
    "MatchStatus",
    "PairingHistory",
    "Participant",
    "Standing",
    "Team",
    "TeamBalancer",
    "TeamSkillAverages",
    "VolleyPairingException",
    "balance_teams",
    "swap_players",
]
