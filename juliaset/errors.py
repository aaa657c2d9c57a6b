"""Exceptions raised by the fill engine."""


class FillError(RuntimeError):
    """A color buffer could not be filled; no partial result exists."""


class BufferAllocationError(FillError):
    """The color buffer could not be allocated."""


class WorkerStartError(FillError):
    """A worker thread could not be started."""
