from volleypairing.models.tournament.match import Match, MatchStatus
from volleypairing.models.tournament.pairing_history import PairingHistory, TeamRecord
from volleypairing.models.tournament.standing import Standing
from volleypairing.models.tournament.tournament_format import (
    ClassicFormat,
    KothFormat,
    MatchConfig,
    PlayoffConfig,
    TournamentFormat,
    format_from_dict,
)

__all__ = [
    "Match",
    "MatchStatus",
    "PairingHistory",
    "TeamRecord",
    "Standing",
    "MatchConfig",
    "PlayoffConfig",
    "ClassicFormat",
    "KothFormat",
    "TournamentFormat",
    "format_from_dict",
]
