from volleypairing.models.player.participant import Participant

__all__ = [
    "Participant",
]
