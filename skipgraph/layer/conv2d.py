"""2D convolution layer.

Wraps nn.Conv2d for (B, C, H, W) inputs. Convolutional residual blocks
use these both on the backbone and as 1x1 shortcut projections.
"""
from __future__ import annotations

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.layer import Conv2dLayerConfig


class Conv2dLayer(nn.Module):
    """A 2D convolution constructed from config."""

    def __init__(self, config: Conv2dLayerConfig) -> None:
        """Create the convolution.

        Args:
            config: Channel counts plus (height, width) pairs for kernel,
                   stride, padding and dilation.
        """
        super().__init__()
        self.config = config
        self.conv = nn.Conv2d(
            config.in_channels,
            config.out_channels,
            kernel_size=tuple(config.kernel_size),
            stride=tuple(config.stride),
            padding=tuple(config.padding),
            dilation=tuple(config.dilation),
            bias=bool(config.bias),
        )

    @override
    def forward(self, x: Tensor) -> Tensor:
        """Convolve a (B, C_in, H, W) input into (B, C_out, H', W')."""
        if x.ndim != 4:
            raise ValueError(f"Expected (B,C,H,W), got {x.shape}")
        return self.conv(x)
