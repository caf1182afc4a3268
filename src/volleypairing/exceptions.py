"""Exceptions for use in Volley Pairing"""

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


# ========== Base Application Exception ==========


class VolleyPairingException(Exception):
    """Base exception for all Volley Pairing errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(VolleyPairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when a pairing configuration is invalid."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no valid pairing can be generated."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(VolleyPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when a contest is in an invalid state for the requested operation."""

    pass


class InsufficientTeamsException(TournamentException):
    """Raised when too few teams are available to build a schedule."""

    pass


class InsufficientPlayersException(TournamentException):
    """Raised when too few participants are present to build a round."""

    pass


# ========== Player Exceptions ==========


class PlayerException(VolleyPairingException):
    """Base exception for participant-related errors."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when participant data is invalid or incomplete."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when the same participant appears more than once in a roster."""

    pass


# ========== Result Exceptions ==========


class ResultException(VolleyPairingException):
    """Base exception for score recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a score is invalid (e.g., negative, or a tie on finish)."""

    pass


class MatchStateException(ResultException):
    """Raised when a match transition is not allowed from its current status."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(VolleyPairingException):
    """Base exception for validation errors."""

    pass


class RatingValidationException(ValidationException):
    """Raised when a skill rating value is invalid."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(VolleyPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
