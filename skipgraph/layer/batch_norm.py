"""Batch normalization layer.

Normalizes each channel over the batch (and spatial) dimensions. Unlike
the other shipped units it carries running statistics, which update in
train() mode and are used as-is in eval() mode.
"""
from __future__ import annotations

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.layer import BatchNormLayerConfig


class BatchNormLayer(nn.Module):
    """BatchNorm1d or BatchNorm2d depending on config.n_dims."""

    def __init__(self, config: BatchNormLayerConfig) -> None:
        super().__init__()
        self.config = config
        cls = nn.BatchNorm1d if config.n_dims == 1 else nn.BatchNorm2d
        self.norm = cls(
            config.num_features,
            eps=float(config.eps),
            momentum=float(config.momentum),
            affine=bool(config.affine),
            track_running_stats=bool(config.track_running_stats),
        )

    @override
    def forward(self, x: Tensor) -> Tensor:
        """Normalize per channel (dimension 1)."""
        return self.norm(x)
