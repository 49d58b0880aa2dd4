"""Custom exceptions for the cycling portal."""


class CyclingPortalError(Exception):
    """Base exception for cycling portal errors."""


class IDNotRecognisedError(CyclingPortalError):
    """No entity of the requested kind has this ID."""


class InvalidNameError(CyclingPortalError):
    """Name is empty, too long, or contains whitespace."""


class NameAlreadyExistsError(CyclingPortalError):
    """Name is already used by another entity of the same kind."""


class InvalidLengthError(CyclingPortalError):
    """Stage is shorter than the minimum stage length."""


class InvalidLocationError(CyclingPortalError):
    """Checkpoint location is outside the stage or clashes with another."""


class InvalidStageTypeError(CyclingPortalError):
    """Checkpoints cannot be added to time-trial stages."""


class InvalidStageStateError(CyclingPortalError):
    """Operation not allowed in the stage's current state."""


class StageNotWaitingForResultsError(InvalidStageStateError):
    """Results can only be registered once stage preparation is concluded."""


class DuplicatedResultError(CyclingPortalError):
    """Rider already has a result in this stage."""


class InvalidCheckpointTimesError(CyclingPortalError):
    """Timestamp count does not match the stage's checkpoints plus start and finish."""


class InvalidCheckpointTypeError(CyclingPortalError, ValueError):
    """Checkpoint type is not valid for the requested operation."""


class InvalidRiderError(CyclingPortalError, ValueError):
    """Rider name is empty or year of birth is out of range."""


class PortalStateError(CyclingPortalError):
    """Saved portal state could not be read."""
