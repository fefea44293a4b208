"""Validation pass: check that widths agree wherever tensors meet.

A residual accumulator sums the predecessor output with every incoming
shortcut, so all of them must share a feature width, and that width must
match what the position's unit expects. Widths are inferred from layer
configs; units that do not constrain width (dropout, activations) are
transparent and simply pass the known width through.

A width belongs to an axis. Convolutions and batch norm size the channel
dim (dim 1); linear layers and the feature norms size the last dim. Two
widths on different axes describe different dims of the same tensor, so
they are never compared.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass

from skipgraph.config.layer import (
    ActivationLayerConfig,
    BatchNormLayerConfig,
    Conv2dLayerConfig,
    DropoutLayerConfig,
    LayerConfig,
    LayerNormLayerConfig,
    LinearLayerConfig,
    RMSNormLayerConfig,
)
from skipgraph.config.topology import (
    NodeConfig,
    ResidualTopologyConfig,
    SequentialTopologyConfig,
    TopologyConfig,
)


class Axis(str, enum.Enum):
    """Tensor dim a width refers to."""

    CHANNELS = "channels"
    LAST = "last"


@dataclass(frozen=True, slots=True)
class _Width:
    """A known size on a known axis."""

    size: int
    axis: Axis


@dataclass(frozen=True, slots=True)
class _IO:
    """Input/output feature width pair for a node (None = unconstrained)."""

    d_in: int | None
    d_out: int | None
    in_axis: Axis = Axis.LAST
    out_axis: Axis = Axis.LAST

    @staticmethod
    def of(w_in: _Width | None, w_out: _Width | None) -> "_IO":
        return _IO(
            d_in=w_in.size if w_in is not None else None,
            d_out=w_out.size if w_out is not None else None,
            in_axis=w_in.axis if w_in is not None else Axis.LAST,
            out_axis=w_out.axis if w_out is not None else Axis.LAST,
        )

    @property
    def width_in(self) -> _Width | None:
        return None if self.d_in is None else _Width(self.d_in, self.in_axis)

    @property
    def width_out(self) -> _Width | None:
        return None if self.d_out is None else _Width(self.d_out, self.out_axis)


class Validator:
    """Checks cross-unit width invariants of a topology config."""

    def validate_topology(
        self, config: TopologyConfig, *, path: str = "topology"
    ) -> None:
        """Validate a topology config by inferring widths."""
        self.infer_node_io(config, path=path)

    def infer_node_io(self, node: NodeConfig, *, path: str) -> _IO:
        """Infer widths for any node type."""
        match node:
            case ResidualTopologyConfig():
                return self.infer_residual_io(node, path=path)
            case SequentialTopologyConfig():
                nodes = [n for _ in range(node.repeat) for n in node.layers]
                return self.infer_seq_io(nodes, path=path)
            case _:
                return self.infer_layer_io(node)

    def infer_layer_io(self, config: LayerConfig) -> _IO:
        """Infer widths for a single unit.

        - Linear: explicit d_in/d_out on the last dim
        - Conv2d: channel counts
        - Norms: preserve their normalized width (batch norm on channels)
        - Dropout/activation: width-transparent (None/None)
        """
        match config:
            case LinearLayerConfig():
                return _IO(d_in=int(config.d_in), d_out=int(config.d_out))
            case Conv2dLayerConfig():
                return _IO(
                    d_in=int(config.in_channels),
                    d_out=int(config.out_channels),
                    in_axis=Axis.CHANNELS,
                    out_axis=Axis.CHANNELS,
                )
            case LayerNormLayerConfig() | RMSNormLayerConfig():
                d = int(config.d_model)
                return _IO(d_in=d, d_out=d)
            case BatchNormLayerConfig():
                d = int(config.num_features)
                return _IO(
                    d_in=d, d_out=d, in_axis=Axis.CHANNELS, out_axis=Axis.CHANNELS
                )
            case DropoutLayerConfig() | ActivationLayerConfig():
                return _IO(d_in=None, d_out=None)
            case _:
                raise ValueError(f"Unsupported layer config: {type(config)!r}")

    def infer_seq_io(self, nodes: list[NodeConfig], *, path: str) -> _IO:
        """Infer widths for a chain, checking each link."""
        first: _Width | None = None
        cur: _Width | None = None
        for i, node in enumerate(nodes):
            node_path = f"{path}.layers[{i}]"
            io = self.infer_node_io(node, path=node_path)
            cur = self.feed(cur, io, path=node_path)
            if i == 0:
                first = io.width_in
        return _IO.of(first, cur)

    def infer_residual_io(self, config: ResidualTopologyConfig, *, path: str) -> _IO:
        """Walk positions in order, checking every accumulator.

        widths[p] is the known output width of position p. The input width
        is only learned from the first unit, since position 1's accumulator
        is the input itself (plus shortcuts from the input).
        """
        n = len(config.layers)
        incoming: dict[int, list[tuple[int, int]]] = {}
        for k, shortcut in enumerate(config.shortcuts):
            incoming.setdefault(shortcut.dst, []).append((k, shortcut.src))

        widths: list[_Width | None] = [None] * (n + 2)
        for position in range(1, n + 2):
            acc = widths[position - 1]
            for k, src in incoming.get(position, ()):
                shortcut_path = f"{path}.shortcuts[{k}]"
                width = self.contribution_width(
                    config.shortcuts[k].projection, widths[src], path=shortcut_path
                )
                acc = self.join(acc, width, path=shortcut_path)

            if position == n + 1:
                widths[position] = acc
                break

            node_path = f"{path}.layers[{position - 1}]"
            io = self.infer_node_io(config.layers[position - 1], path=node_path)
            if position == 1 and widths[0] is None:
                widths[0] = io.width_in
            widths[position] = self.feed(acc, io, path=node_path)

        return _IO.of(widths[0], widths[n + 1])

    def contribution_width(
        self, projection: NodeConfig | None, src_width: _Width | None, *, path: str
    ) -> _Width | None:
        """Width a shortcut adds to its accumulator."""
        if projection is None:
            return src_width
        io = self.infer_node_io(projection, path=f"{path}.projection")
        return self.feed(src_width, io, path=f"{path}.projection")

    def feed(self, cur: _Width | None, io: _IO, *, path: str) -> _Width | None:
        """Pass a value of width `cur` into a node, returning its output width."""
        want = io.width_in
        if want is not None:
            self.require_match(cur, want, path=path)
        out = io.width_out
        if out is not None:
            return out
        return cur if want is None else want

    def join(
        self, acc: _Width | None, width: _Width | None, *, path: str
    ) -> _Width | None:
        """Add a shortcut contribution to an accumulator of width `acc`."""
        if (
            acc is not None
            and width is not None
            and acc.axis == width.axis
            and acc.size != width.size
        ):
            raise ValueError(
                f"{path}: shortcut adds width {width.size} to an accumulator of "
                f"width {acc.size}. Fix: add a projection mapping "
                f"{width.size} -> {acc.size}."
            )
        return acc if acc is not None else width

    def require_match(self, cur: _Width | None, want: _Width, *, path: str) -> None:
        """Require width match between a value and the node consuming it.

        Widths on different axes are not comparable and pass unchecked.
        """
        if cur is not None and cur.axis == want.axis and cur.size != want.size:
            raise ValueError(
                f"{path}: expected d_in={cur.size}, got d_in={want.size}. "
                "Fix: make this node's input dim match the previous node's output dim."
            )
