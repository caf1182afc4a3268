"""Type hints used in Volley Pairing."""

from typing import Dict, List, Literal, Mapping, Sequence, Tuple

# Tournament mode literals
Mode = Literal["CLASSIC", "KOTH"]

# Team identifiers, one inner list per pool
TeamIdsByPool = Sequence[Sequence[str]]
# (team_a_id, team_b_id) for an elimination match
TeamPairing = Tuple[str, str]
# (team_id, player_id) naming one player on one team
TeamSlot = Tuple[str, str]
# team id -> participant ids on that team
TeamMembership = Mapping[str, Sequence[str]]
# One bucket of participants per team while balancing
Buckets = List[List["Participant"]]
# skill key -> value
SkillScores = Dict[str, float]

#  LocalWords:  TeamPairing TeamMembership
