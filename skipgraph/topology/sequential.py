"""Sequential topology: simple unit chain.

The most basic topology: each unit's output feeds into the next. It is
what a ResidualTopology with no shortcuts and no scales reduces to.
"""
from __future__ import annotations

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.topology import SequentialTopologyConfig
from skipgraph.topology.utils import unwrap_output


class SequentialTopology(nn.Module):
    """Apply units in sequence, optionally repeating the pattern.

    Similar to nn.Sequential but built from config and tolerant of
    (output, cache) tuple returns. Each repeat gets its own parameters.
    """

    def __init__(self, config: SequentialTopologyConfig) -> None:
        """Build all units from config."""
        super().__init__()
        self.config: SequentialTopologyConfig = config
        built = [cfg.build() for _ in range(config.repeat) for cfg in config.layers]
        if not built:
            raise ValueError("SequentialTopology requires at least one layer")
        self.layers: nn.ModuleList = nn.ModuleList(built)

    @override
    def forward(self, x: Tensor) -> Tensor:
        """Forward through all units, extracting outputs from tuples."""
        for layer in self.layers:
            x = unwrap_output(layer(x))
        return x
