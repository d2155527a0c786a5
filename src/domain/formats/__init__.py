"""Legacy tournament-software export formats."""

from domain.formats.swiss_manager import emit_fixedwidth, month_year_label
from domain.formats.swiss_perfect import emit_tabular

__all__ = ["emit_fixedwidth", "emit_tabular", "month_year_label"]
