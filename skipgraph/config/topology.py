"""Topology configuration: how transform units are composed.

A graph is a backbone of units plus shortcut edges that feed earlier
results into later accumulators, and scale edges that rescale an
accumulator before its unit runs. Topology configs describe these
composition patterns declaratively so they can be written in YAML and
validated before anything is built.
"""
from __future__ import annotations

import enum
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field, model_validator

from skipgraph.config import Config, NonNegativeInt, PositiveInt
from skipgraph.config.layer import LayerConfig
from skipgraph.topology.errors import check_scale, check_shortcut


class TopologyType(str, enum.Enum):
    """Available topology patterns for composing units.

    SEQUENTIAL: Plain chain, output of unit N is input to unit N+1
    RESIDUAL: Backbone with arbitrary forward shortcuts and scales
    """

    SEQUENTIAL = "SequentialTopology"
    RESIDUAL = "ResidualTopology"

    @staticmethod
    def module_name() -> str:
        """Return the Python module containing topology implementations."""
        return "skipgraph.topology"


class SequentialTopologyConfig(Config):
    """A plain chain of units, optionally repeated.

    Each repeat builds fresh units; parameters are never shared.
    """

    type: Literal[TopologyType.SEQUENTIAL] = TopologyType.SEQUENTIAL
    layers: list["NodeConfig"]
    repeat: PositiveInt = 1


class ShortcutConfig(BaseModel):
    """An edge injecting position `src` into the accumulator of `dst`.

    If `projection` is set, it is built and applied to the source output
    before the addition.
    """

    src: NonNegativeInt
    dst: PositiveInt
    projection: "NodeConfig | None" = None


class ScaleConfig(BaseModel):
    """Multiply the accumulator of `position` by `factor` before its unit."""

    position: PositiveInt
    factor: float


class ResidualTopologyConfig(Config):
    """A backbone with shortcut and scale edges.

    Positions refer to the full backbone: 0 is the input, 1..len(layers)
    are unit outputs and len(layers)+1 is the graph output. A layer may
    itself be a topology, so residual blocks nest.
    """

    type: Literal[TopologyType.RESIDUAL] = TopologyType.RESIDUAL
    layers: list["NodeConfig"]
    shortcuts: list[ShortcutConfig] = Field(default_factory=list)
    scales: list[ScaleConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_positions(self) -> "ResidualTopologyConfig":
        """Reject backward, self and out-of-range edges up front."""
        n = len(self.layers)
        for shortcut in self.shortcuts:
            check_shortcut(shortcut.src, shortcut.dst, n)
        seen: set[int] = set()
        for scale in self.scales:
            check_scale(scale.position, n)
            if scale.position in seen:
                raise ValueError(
                    f"Duplicate scale for position {scale.position}"
                )
            seen.add(scale.position)
        return self


# Union of all topology types for discriminated parsing
TopologyConfig: TypeAlias = Annotated[
    SequentialTopologyConfig | ResidualTopologyConfig,
    Field(discriminator="type"),
]


# A node in the topology tree can be either a layer or a sub-topology
NodeConfig: TypeAlias = LayerConfig | TopologyConfig


SequentialTopologyConfig.model_rebuild()
ShortcutConfig.model_rebuild()
ResidualTopologyConfig.model_rebuild()
