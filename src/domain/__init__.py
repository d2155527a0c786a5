"""Ratings export domain modules."""

from domain.common import Player, RatingEntry, RatingMap, Variant
from domain.errors import ExportError

__all__ = ["ExportError", "Player", "RatingEntry", "RatingMap", "Variant"]
