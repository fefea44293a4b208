"""
validate_test provides tests for width validation.
"""
from __future__ import annotations

import unittest

from skipgraph.compiler.validate import Validator
from skipgraph.config.layer import (
    ActivationLayerConfig,
    BatchNormLayerConfig,
    Conv2dLayerConfig,
    DropoutLayerConfig,
    LayerNormLayerConfig,
    LinearLayerConfig,
)
from skipgraph.config.topology import (
    ResidualTopologyConfig,
    SequentialTopologyConfig,
    ShortcutConfig,
)


class ValidatorTest(unittest.TestCase):
    """
    ValidatorTest provides tests for the Validator class.
    """
    def setUp(self) -> None:
        self.validator = Validator()

    def test_sequential_chain(self) -> None:
        config = SequentialTopologyConfig(
            layers=[
                LinearLayerConfig(d_in=4, d_out=8),
                DropoutLayerConfig(p=0.1),
                LinearLayerConfig(d_in=8, d_out=2),
            ]
        )
        io = self.validator.infer_node_io(config, path="t")
        self.assertEqual((io.d_in, io.d_out), (4, 2))

    def test_sequential_mismatch(self) -> None:
        config = SequentialTopologyConfig(
            layers=[
                LinearLayerConfig(d_in=4, d_out=8),
                LinearLayerConfig(d_in=6, d_out=2),
            ]
        )
        with self.assertRaises(ValueError) as ctx:
            self.validator.validate_topology(config)
        self.assertIn("topology.layers[1]", str(ctx.exception))

    def test_repeat_requires_square_layers(self) -> None:
        config = SequentialTopologyConfig(
            layers=[LinearLayerConfig(d_in=4, d_out=8)], repeat=2
        )
        with self.assertRaises(ValueError):
            self.validator.validate_topology(config)

    def test_residual_widths(self) -> None:
        config = ResidualTopologyConfig(
            layers=[
                LinearLayerConfig(d_in=12, d_out=8),
                ActivationLayerConfig(),
                LinearLayerConfig(d_in=8, d_out=4),
            ],
            shortcuts=[
                ShortcutConfig(
                    src=0, dst=4, projection=LinearLayerConfig(d_in=12, d_out=4)
                ),
                ShortcutConfig(src=3, dst=4),
            ],
        )
        io = self.validator.infer_node_io(config, path="t")
        self.assertEqual((io.d_in, io.d_out), (12, 4))

    def test_residual_unprojected_width_mismatch(self) -> None:
        config = ResidualTopologyConfig(
            layers=[LinearLayerConfig(d_in=12, d_out=8)],
            shortcuts=[ShortcutConfig(src=0, dst=2)],
        )
        with self.assertRaises(ValueError) as ctx:
            self.validator.validate_topology(config)
        self.assertIn("topology.shortcuts[0]", str(ctx.exception))
        self.assertIn("projection", str(ctx.exception))

    def test_residual_projection_input_mismatch(self) -> None:
        config = ResidualTopologyConfig(
            layers=[LinearLayerConfig(d_in=12, d_out=8)],
            shortcuts=[
                ShortcutConfig(
                    src=0, dst=2, projection=LinearLayerConfig(d_in=8, d_out=8)
                )
            ],
        )
        with self.assertRaises(ValueError) as ctx:
            self.validator.validate_topology(config)
        self.assertIn("topology.shortcuts[0].projection", str(ctx.exception))

    def test_residual_unit_input_mismatch(self) -> None:
        config = ResidualTopologyConfig(
            layers=[
                LinearLayerConfig(d_in=4, d_out=8),
                LayerNormLayerConfig(d_model=4),
            ],
        )
        with self.assertRaises(ValueError):
            self.validator.validate_topology(config)

    def test_input_width_from_first_unit_checks_input_shortcuts(self) -> None:
        config = ResidualTopologyConfig(
            layers=[
                LinearLayerConfig(d_in=6, d_out=4),
                LinearLayerConfig(d_in=4, d_out=4),
            ],
            shortcuts=[ShortcutConfig(src=0, dst=2)],
        )
        with self.assertRaises(ValueError):
            self.validator.validate_topology(config)

    def test_conv_block(self) -> None:
        config = ResidualTopologyConfig(
            layers=[
                Conv2dLayerConfig(
                    in_channels=3, out_channels=5, kernel_size=(3, 3), padding=(1, 1)
                ),
                BatchNormLayerConfig(num_features=5),
                ActivationLayerConfig(),
            ],
            shortcuts=[ShortcutConfig(src=1, dst=3), ShortcutConfig(src=2, dst=4)],
        )
        io = self.validator.infer_node_io(config, path="t")
        self.assertEqual((io.d_in, io.d_out), (3, 5))

    def test_channel_and_last_dim_widths_are_not_compared(self) -> None:
        config = ResidualTopologyConfig(
            layers=[
                Conv2dLayerConfig(in_channels=3, out_channels=5, kernel_size=(1, 1)),
                LayerNormLayerConfig(d_model=8),
            ],
            shortcuts=[ShortcutConfig(src=1, dst=3)],
        )
        io = self.validator.infer_node_io(config, path="t")
        self.assertEqual((io.d_in, io.d_out), (3, 8))

    def test_channel_mismatch_still_rejected(self) -> None:
        config = ResidualTopologyConfig(
            layers=[
                Conv2dLayerConfig(in_channels=3, out_channels=5, kernel_size=(1, 1)),
                BatchNormLayerConfig(num_features=4),
            ],
        )
        with self.assertRaises(ValueError) as ctx:
            self.validator.validate_topology(config)
        self.assertIn("topology.layers[1]", str(ctx.exception))

    def test_nested_error_path(self) -> None:
        inner = ResidualTopologyConfig(
            layers=[LinearLayerConfig(d_in=4, d_out=2)],
            shortcuts=[ShortcutConfig(src=0, dst=2)],
        )
        outer = SequentialTopologyConfig(layers=[inner])
        with self.assertRaises(ValueError) as ctx:
            self.validator.validate_topology(outer, path="model")
        self.assertIn("model.layers[0].shortcuts[0]", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
