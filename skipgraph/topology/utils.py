"""Shared utilities for topology implementations."""
from __future__ import annotations

from torch import Tensor


def unwrap_output(out: Tensor | tuple[Tensor, object]) -> Tensor:
    """Extract the tensor from a unit output.

    Some units return (output, cache) tuples. Single-tensor topologies
    only carry the output forward.
    """
    if isinstance(out, tuple):
        return out[0]
    return out
