"""Dropout layer for regularization during training."""
from __future__ import annotations

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.layer import DropoutLayerConfig


class DropoutLayer(nn.Module):
    """Dropout with our standard layer interface.

    Only active during training (module.train()); passes through unchanged
    during evaluation (module.eval()).
    """

    def __init__(self, config: DropoutLayerConfig) -> None:
        super().__init__()
        self.config = config
        self.dropout = nn.Dropout(config.p)

    @override
    def forward(self, x: Tensor) -> Tensor:
        """Apply dropout (only during training)."""
        return self.dropout(x)
