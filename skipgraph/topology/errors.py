"""Topology errors and the position rules that raise them.

Positions are integers: 0 is the graph input, 1..N are the outputs of the
backbone units, and N+1 is the virtual terminal position. The same rules
guard imperative registration on ResidualTopology and declarative
ResidualTopologyConfig validation.
"""
from __future__ import annotations

import operator


class InvalidTopologyError(ValueError):
    """A shortcut or scale references an impossible position.

    Raised at registration time, before the edge is recorded, so the graph
    under construction is left untouched and the caller may retry.
    """


def as_position(value: object, *, name: str) -> int:
    """Coerce an integer-like position to int, rejecting bools and floats."""
    if isinstance(value, bool):
        raise InvalidTopologyError(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)  # type: ignore[arg-type]
    except TypeError as e:
        raise InvalidTopologyError(
            f"{name} must be an integer, got {value!r}"
        ) from e


def check_shortcut(src: int, dst: int, num_layers: int) -> tuple[int, int]:
    """Validate a shortcut edge against a backbone of num_layers units.

    Returns the positions as plain ints.
    """
    src = as_position(src, name="Shortcut source")
    dst = as_position(dst, name="Shortcut destination")
    terminal = num_layers + 1
    if src < 0:
        raise InvalidTopologyError(
            f"Shortcut source must be >= 0, got src={src} (N={num_layers})"
        )
    if dst <= src:
        raise InvalidTopologyError(
            f"Shortcut must point forward, got src={src} dst={dst}"
        )
    if src > num_layers:
        raise InvalidTopologyError(
            f"Shortcut source {src} is past the last layer (N={num_layers})"
        )
    if dst > terminal:
        raise InvalidTopologyError(
            f"Shortcut destination {dst} is past the terminal position {terminal}"
        )
    return src, dst


def check_scale(position: int, num_layers: int) -> int:
    """Validate a scale position against a backbone of num_layers units."""
    position = as_position(position, name="Scale position")
    terminal = num_layers + 1
    if position < 1 or position > terminal:
        raise InvalidTopologyError(
            f"Scale position must be in [1, {terminal}], got {position}"
        )
    return position
