"""Exceptions raised by the QC pipeline.

Validation findings are never raised; they are returned as data. Only input
problems and regeneration failures abort a run.
"""


class QCError(Exception):
    """Base class for pipeline errors."""


class InputError(QCError):
    """A research or report file is missing or malformed."""


class RegenerationError(QCError):
    """The report renderer failed; the iteration loop cannot continue."""
