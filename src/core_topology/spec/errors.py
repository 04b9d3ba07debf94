"""
Error taxonomy
==============

TopologyError subclasses ValueError, so guards written against the
builders' ValueError convention keep catching topology failures.

    InvalidTopology    - bad vertex/edge id, or an edit that would leave
                         faces and connectivity out of step
    MalformedBoundary  - an edge pool that is not one simple closed walk
    ContiguityError    - vertex ids stopped being 0..n-1 (invariant bug,
                         aborts the operation, never the live shape)
"""


class TopologyError(ValueError):
    """Base class for recoverable topology failures."""


class InvalidTopology(TopologyError):
    """Operator asked to act on something that does not exist, or would corrupt state."""


class MalformedBoundary(TopologyError):
    """Face reconstruction could not close a single simple cycle."""


class ContiguityError(RuntimeError):
    """Vertex id space is no longer contiguous after a delete/contract."""
