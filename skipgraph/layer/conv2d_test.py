"""Test the 2D convolution layer."""
from __future__ import annotations

import unittest

import torch

from skipgraph.config.layer import Conv2dLayerConfig
from skipgraph.layer.conv2d import Conv2dLayer


class Conv2dLayerTest(unittest.TestCase):
    """Test the 2D convolution layer."""

    def test_forward_shape(self) -> None:
        layer = Conv2dLayer(
            Conv2dLayerConfig(
                in_channels=3,
                out_channels=5,
                kernel_size=(7, 9),
                stride=(3, 2),
                padding=(2, 3),
            )
        )
        y = layer(torch.randn(2, 3, 100, 120))
        # H: (100 + 4 - 7) // 3 + 1, W: (120 + 6 - 9) // 2 + 1
        self.assertEqual(tuple(y.shape), (2, 5, 33, 59))

    def test_rejects_non_4d(self) -> None:
        layer = Conv2dLayer(
            Conv2dLayerConfig(in_channels=3, out_channels=3, kernel_size=(1, 1))
        )
        with self.assertRaises(ValueError):
            layer(torch.randn(3, 4, 4))


if __name__ == "__main__":
    unittest.main()
