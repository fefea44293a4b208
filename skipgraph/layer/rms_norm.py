"""RMSNorm: LayerNorm without the centering.

RMSNorm normalizes by the root mean square instead of mean and variance,
which drops the mean subtraction and the bias term.
"""
from __future__ import annotations

import torch
from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.layer import RMSNormLayerConfig


class RMSNormLayer(nn.Module):
    """Root mean square normalization layer."""

    def __init__(self, config: RMSNormLayerConfig) -> None:
        """Initialize RMSNorm with optional learnable scale.

        Args:
            config: Specifies d_model, epsilon, and whether to use
                   a learnable elementwise scale (weight).
        """
        super().__init__()
        self.config = config
        self.d_model = int(config.d_model)
        self.eps = float(config.eps)
        self.weight: nn.Parameter | None = (
            nn.Parameter(torch.ones(self.d_model))
            if config.elementwise_affine
            else None
        )

    @override
    def forward(self, x: Tensor) -> Tensor:
        """Compute x / sqrt(mean(x^2) + eps), then apply the optional weight."""
        if x.ndim < 1:
            raise ValueError(f"Expected x.ndim >= 1, got {x.shape}")
        if int(x.shape[-1]) != self.d_model:
            raise ValueError(f"Expected x last dim {self.d_model}, got {x.shape}")

        x_f = x.float()
        inv_rms = torch.rsqrt(x_f.pow(2).mean(dim=-1, keepdim=True) + self.eps)
        y = (x_f * inv_rms).to(dtype=x.dtype)
        if self.weight is not None:
            y = y * self.weight
        return y
