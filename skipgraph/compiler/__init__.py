"""Compiler passes over graph configs.

Structural rules (edge directions, position ranges) are enforced by the
configs themselves. The validator here goes one step further and checks
that the feature widths meeting at every accumulator agree, so a bad
manifest fails before any module is built.
"""
from __future__ import annotations

from skipgraph.compiler.validate import Validator

__all__ = ["Validator"]
