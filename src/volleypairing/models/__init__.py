from volleypairing.models.player import Participant
from volleypairing.models.team import Team, TeamSkillAverages

__all__ = [
    "Participant",
    "Team",
    "TeamSkillAverages",
]
