"""
errors.py: Exception hierarchy for the visualisation core.

Only two conditions are raised by tripviz.services:

  InvalidArgumentError: hard failure (e.g. negative hotspot limit).
                        Raised before any computation starts, so no
                        partial plan is ever produced.
  EmptyInputError:      recoverable. The snapshot had nothing in it;
                        the caller should suppress rendering instead of
                        drawing a degenerate heatmap.

Unknown visualisation modes are NOT errors. Services take a documented
fallback branch and the caller logs a warning.
"""


class TripVizError(Exception):
    """Base class for every error raised by the visualisation core."""


class InvalidArgumentError(TripVizError, ValueError):
    """An argument is outside its documented domain."""


class EmptyInputError(TripVizError):
    """The data snapshot is empty; nothing should be rendered."""
