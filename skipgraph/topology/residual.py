"""Residual topology: a backbone with arbitrary forward shortcuts.

Positions index the dataflow: 0 is the graph input, 1..N are the outputs
of the N backbone units in the order they were appended, and N+1 is a
virtual terminal position whose accumulator is the graph output.

Every position p >= 1 accumulates the output of p-1 plus every shortcut
whose destination is p (each optionally passed through its own projection
unit), multiplies the sum by p's scale if one is registered, and feeds the
result to unit p. The terminal position does the same without a unit.
Because every edge points from a lower position to a strictly higher one,
walking positions in increasing order is always a valid evaluation order.

Example (the classic two-layer residual block):

    block = ResidualTopology()
    block.append(nn.Linear(d, d))
    block.append(nn.ReLU())
    block.add_shortcut(0, 3)  # y = relu(linear(x)) + x
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, TypeAlias

from torch import Tensor, nn
from typing_extensions import override

from skipgraph.config.topology import ResidualTopologyConfig
from skipgraph.console import Logger, logger as default_logger
from skipgraph.topology.errors import (
    InvalidTopologyError,
    check_scale,
    check_shortcut,
)
from skipgraph.topology.utils import unwrap_output


# A single tensor, or a tuple of tensors for multi-input units
State: TypeAlias = Tensor | tuple[Tensor, ...]


class Shortcut(NamedTuple):
    """A registered shortcut edge, as reported by ResidualTopology.shortcuts()."""

    src: int
    dst: int
    projection: nn.Module | None


class ResidualTopology(nn.Module):
    """Backbone of units plus shortcut and scale edges.

    Build it imperatively with append/add_shortcut/add_scale, or from a
    ResidualTopologyConfig. Edges are validated against the backbone length
    at the time they are registered; forward() performs no validation.
    """

    def __init__(self, config: ResidualTopologyConfig | None = None) -> None:
        """Create an empty graph, or build one from config.

        With a config, all layers are appended first, then shortcuts (with
        their projections built) and scales are registered through the same
        checks as imperative calls.
        """
        super().__init__()
        self.config: ResidualTopologyConfig | None = config
        self.layers: nn.ModuleList = nn.ModuleList()
        self.projections: nn.ModuleList = nn.ModuleList()
        # dst -> [(src, index into self.projections or None)], registration order
        self._shortcuts: dict[int, list[tuple[int, int | None]]] = {}
        self._scales: dict[int, float] = {}

        if config is not None:
            for layer in config.layers:
                self.append(layer.build())
            for shortcut in config.shortcuts:
                projection = (
                    shortcut.projection.build()
                    if shortcut.projection is not None
                    else None
                )
                self.add_shortcut(shortcut.src, shortcut.dst, projection)
            for scale in config.scales:
                self.add_scale(scale.position, scale.factor)

    # ─────────────────────────────────────────────────────────────────────
    # Assembly
    # ─────────────────────────────────────────────────────────────────────

    @property
    def num_layers(self) -> int:
        """Number of backbone units (N)."""
        return len(self.layers)

    @property
    def terminal(self) -> int:
        """The virtual output position (N+1)."""
        return len(self.layers) + 1

    def append(self, unit: nn.Module) -> int:
        """Append a unit to the backbone and return its position."""
        self.layers.append(unit)
        return len(self.layers)

    def add_shortcut(
        self, src: int, dst: int, projection: nn.Module | None = None
    ) -> None:
        """Feed the output of position `src` into the accumulator of `dst`.

        Args:
            src: Source position, 0 (input) up to the current N.
            dst: Destination position, src+1 up to the current N+1.
            projection: Optional unit applied to the source output before
                it is added.

        Raises:
            InvalidTopologyError: If a position is not an integer, or the
                edge points backward, to itself, or past the current
                backbone. Nothing is recorded.
        """
        src, dst = check_shortcut(src, dst, self.num_layers)
        if projection is not None and not isinstance(projection, nn.Module):
            raise InvalidTopologyError(
                f"Shortcut projection must be an nn.Module, got {type(projection)!r}"
            )

        index: int | None = None
        if projection is not None:
            self.projections.append(projection)
            index = len(self.projections) - 1
        self._shortcuts.setdefault(dst, []).append((src, index))

    def add_scale(self, position: int, factor: float) -> None:
        """Multiply the accumulator of `position` by `factor` before its unit.

        Registering a second scale for the same position replaces the first
        and logs a warning.

        Raises:
            InvalidTopologyError: If position is not an integer in [1, N+1].
        """
        position = check_scale(position, self.num_layers)
        if position in self._scales:
            default_logger.warning(
                f"Scale at position {position} replaced: "
                f"{self._scales[position]:g} -> {float(factor):g}"
            )
        self._scales[position] = float(factor)

    def shortcuts(self) -> list[Shortcut]:
        """All shortcut edges, ordered by destination then registration."""
        return [
            Shortcut(
                src=src,
                dst=dst,
                projection=self.projections[index] if index is not None else None,
            )
            for dst in sorted(self._shortcuts)
            for src, index in self._shortcuts[dst]
        ]

    def scales(self) -> dict[int, float]:
        """A copy of the position -> factor mapping."""
        return dict(self._scales)

    # ─────────────────────────────────────────────────────────────────────
    # Evaluation
    # ─────────────────────────────────────────────────────────────────────

    @override
    def forward(self, x: Tensor | Sequence[Tensor]) -> State:
        """Run one pass over the graph.

        A single tensor flows through units as `unit(x)`. A list or tuple
        of tensors makes every per-position value a tuple: units are called
        as `unit(*values)`, additions are elementwise over the tuple and a
        tuple is returned.
        """
        multi = isinstance(x, (list, tuple))
        state: State = tuple(x) if multi else x  # type: ignore[arg-type]
        outputs: list[State] = [state]
        for position, layer in enumerate(self.layers, start=1):
            acc = self._accumulate(outputs, position, multi)
            outputs.append(self._apply(layer, acc, multi))
        return self._accumulate(outputs, self.terminal, multi)

    def _accumulate(self, outputs: list[State], position: int, multi: bool) -> State:
        """Predecessor output plus incoming shortcuts, then the scale."""
        acc = outputs[position - 1]
        for src, index in self._shortcuts.get(position, ()):
            contribution = outputs[src]
            if index is not None:
                contribution = self._apply(self.projections[index], contribution, multi)
            acc = self._add(acc, contribution, multi)
        factor = self._scales.get(position)
        if factor is not None:
            acc = self._scale(acc, factor, multi)
        return acc

    @staticmethod
    def _apply(unit: nn.Module, state: State, multi: bool) -> State:
        if not multi:
            return unwrap_output(unit(state))
        out = unit(*state)
        if isinstance(out, Tensor):
            return (out,)
        return tuple(out)

    @staticmethod
    def _add(left: State, right: State, multi: bool) -> State:
        # Out-of-place: stored outputs must stay intact for later shortcuts.
        if not multi:
            return left + right  # type: ignore[operator]
        return tuple(a + b for a, b in zip(left, right, strict=True))  # type: ignore[arg-type]

    @staticmethod
    def _scale(state: State, factor: float, multi: bool) -> State:
        if not multi:
            return state * factor  # type: ignore[operator]
        return tuple(t * factor for t in state)  # type: ignore[union-attr]

    # ─────────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────────

    def summary_rows(self) -> list[list[str]]:
        """One [position, unit, shortcuts in, scale] row per position."""
        rows: list[list[str]] = []
        for position in range(self.terminal + 1):
            if position == 0:
                unit = "input"
            elif position == self.terminal:
                unit = "output"
            else:
                unit = type(self.layers[position - 1]).__name__
            incoming = ", ".join(
                str(src)
                if index is None
                else f"{src}→{type(self.projections[index]).__name__}"
                for src, index in self._shortcuts.get(position, ())
            )
            factor = self._scales.get(position)
            rows.append(
                [
                    str(position),
                    unit,
                    incoming or "-",
                    f"{factor:g}" if factor is not None else "-",
                ]
            )
        return rows

    def summarize(self, logger: Logger | None = None) -> None:
        """Print the position table and edge counts through the rich logger."""
        logger = logger or default_logger
        logger.graph_summary(type(self).__name__, self.summary_rows())
        logger.key_value(
            {
                "layers": self.num_layers,
                "shortcuts": sum(len(e) for e in self._shortcuts.values()),
                "projections": len(self.projections),
                "scales": len(self._scales),
                "parameters": sum(p.numel() for p in self.parameters()),
            }
        )

    @override
    def extra_repr(self) -> str:
        edges = ", ".join(
            f"({s.src}, {s.dst}{', proj' if s.projection is not None else ''})"
            for s in self.shortcuts()
        )
        return f"shortcuts=[{edges}], scales={self._scales}"
