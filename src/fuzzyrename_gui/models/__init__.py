"""Modèles Qt pour fuzzyrename GUI."""

from fuzzyrename_gui.models.matches_model import MatchesModel

__all__ = ["MatchesModel"]
