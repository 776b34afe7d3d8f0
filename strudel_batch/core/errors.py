"""Exception types raised by strudel-batch."""


class StrudelBatchError(Exception):
    """Base class for all strudel-batch errors."""


class InvalidArgumentError(StrudelBatchError, ValueError):
    """A caller passed a value that violates an operation's contract."""
