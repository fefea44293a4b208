"""Test the LayerNorm layer."""
from __future__ import annotations

import unittest

import torch

from skipgraph.config.layer import LayerNormLayerConfig
from skipgraph.layer.layer_norm import LayerNormLayer


class LayerNormLayerTest(unittest.TestCase):
    """Test the LayerNorm layer."""

    def test_normalizes_last_dim(self) -> None:
        layer = LayerNormLayer(LayerNormLayerConfig(d_model=8))
        y = layer(torch.randn(2, 3, 8) * 5.0 + 2.0)
        self.assertEqual(tuple(y.shape), (2, 3, 8))
        torch.testing.assert_close(y.mean(dim=-1), torch.zeros(2, 3), atol=1e-5, rtol=0.0)


if __name__ == "__main__":
    unittest.main()
