"""Standard LayerNorm layer.

LayerNorm normalizes each sample independently across the feature dimension,
centering (subtracting mean) and scaling (dividing by std).
"""
from __future__ import annotations

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.layer import LayerNormLayerConfig


class LayerNormLayer(nn.Module):
    """Standard layer normalization wrapping nn.LayerNorm."""

    def __init__(self, config: LayerNormLayerConfig) -> None:
        super().__init__()
        self.config = config
        self.norm = nn.LayerNorm(
            config.d_model,
            eps=float(config.eps),
        )

    @override
    def forward(self, x: Tensor) -> Tensor:
        """Apply layer normalization."""
        return self.norm(x)
