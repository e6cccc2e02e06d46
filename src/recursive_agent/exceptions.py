"""Exception hierarchy for the recursive execution engine."""


class RecursiveAgentError(Exception):
    """Base class for all engine errors."""

    pass


class SplitPolicyFault(RecursiveAgentError):
    """Raised when the decomposition policy or splitter fails."""

    pass


class ExecutionFault(RecursiveAgentError):
    """Raised when the work executor cannot produce a result."""

    pass


class TransportFault(RecursiveAgentError):
    """Raised by a stream sink that can no longer deliver snapshots."""

    pass


class InvalidStateTransition(RecursiveAgentError):
    """Raised when a work unit would move backwards in its lifecycle."""

    pass


class SnapshotPatchError(RecursiveAgentError):
    """Raised when a tree patch does not line up with the assembled tree."""

    pass
