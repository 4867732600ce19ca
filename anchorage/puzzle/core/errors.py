"""Caller contract violations raised by the puzzle state tracker."""

from __future__ import annotations


class PreconditionViolation(ValueError):
    """A state mutation was requested that the session cannot honor.

    Fatal to the call, not to the session: state is left untouched.
    """


class SessionNotInitialized(PreconditionViolation):
    """No fleet has been loaded into the session."""


class UnknownVesselType(PreconditionViolation):
    """The vessel type is not part of the session catalog."""


class ExhaustedVesselType(PreconditionViolation):
    """Every vessel of the requested type is already placed."""


class DuplicateVesselId(PreconditionViolation):
    """A placed vessel with the same id already exists."""


class VesselNotPlaced(PreconditionViolation):
    """The vessel to remove is not on the anchorage."""
