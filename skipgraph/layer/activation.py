"""Pointwise activation layer.

A parameter-free non-linearity. In a residual graph these are the units
that make "scale before the unit" observably different from "scale after".
"""
from __future__ import annotations

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.layer import ActivationKind, ActivationLayerConfig


class ActivationLayer(nn.Module):
    """Apply the configured activation elementwise."""

    def __init__(self, config: ActivationLayerConfig) -> None:
        super().__init__()
        self.config = config
        match config.kind:
            case ActivationKind.RELU:
                self.fn: nn.Module = nn.ReLU()
            case ActivationKind.GELU:
                self.fn = nn.GELU()
            case ActivationKind.SILU:
                self.fn = nn.SiLU()
            case ActivationKind.TANH:
                self.fn = nn.Tanh()
            case ActivationKind.SIGMOID:
                self.fn = nn.Sigmoid()
            case ActivationKind.IDENTITY:
                self.fn = nn.Identity()
            case _:
                raise ValueError(f"Unsupported activation: {config.kind}")

    @override
    def forward(self, x: Tensor) -> Tensor:
        return self.fn(x)
