"""
Exceptions raised by proof constructors.

Verifiers never raise; they answer ``False``.  Both concrete errors are
also ``ValueError`` so callers that only catch argument errors keep
working.
"""


class TSSZKError(Exception):
    """Base class for tsszk errors."""


class ProofConstructionError(TSSZKError, ValueError):
    """A prover received a missing (``None``) argument."""


class ProofFormatError(TSSZKError, ValueError):
    """Wire parts do not have the shape of a proof."""
