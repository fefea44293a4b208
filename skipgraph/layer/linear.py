"""Simple linear projection layer.

Wraps nn.Linear so it can be constructed from config. Most shortcut
projections are one of these, mapping a source width onto the width of
the accumulator it joins.
"""
from __future__ import annotations

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.layer import LinearLayerConfig


class LinearLayer(nn.Module):
    """A linear projection with our standard layer interface."""

    def __init__(self, config: LinearLayerConfig) -> None:
        """Create a linear projection.

        Args:
            config: Specifies input dim (d_in), output dim (d_out), and bias.
        """
        super().__init__()
        self.config = config
        self.linear = nn.Linear(
            config.d_in,
            config.d_out,
            bias=bool(config.bias),
        )

    @override
    def forward(self, x: Tensor) -> Tensor:
        """Apply the linear projection over the last dimension."""
        return self.linear(x)
