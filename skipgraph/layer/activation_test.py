"""Test the activation layer."""
from __future__ import annotations

import unittest

import torch
import torch.nn.functional as F

from skipgraph.config.layer import ActivationKind, ActivationLayerConfig
from skipgraph.layer.activation import ActivationLayer


class ActivationLayerTest(unittest.TestCase):
    """Test the activation layer."""

    def test_kinds(self) -> None:
        x = torch.randn(3, 5)
        expected = {
            ActivationKind.RELU: F.relu(x),
            ActivationKind.GELU: F.gelu(x),
            ActivationKind.SILU: F.silu(x),
            ActivationKind.TANH: torch.tanh(x),
            ActivationKind.SIGMOID: torch.sigmoid(x),
            ActivationKind.IDENTITY: x,
        }
        for kind, want in expected.items():
            with self.subTest(kind=kind):
                layer = ActivationLayer(ActivationLayerConfig(kind=kind))
                torch.testing.assert_close(layer(x), want)

    def test_default_is_relu(self) -> None:
        self.assertEqual(ActivationLayerConfig().kind, ActivationKind.RELU)

    def test_has_no_parameters(self) -> None:
        layer = ActivationLayer(ActivationLayerConfig(kind=ActivationKind.GELU))
        self.assertEqual(list(layer.parameters()), [])


if __name__ == "__main__":
    unittest.main()
