"""Composition engine: how transform units are wired together.

A topology is itself an nn.Module, so graphs nest: any topology can sit at
a backbone position or serve as a shortcut projection of another.

- sequential: a plain chain of units
- residual: a backbone plus forward shortcut and scale edges
- errors: InvalidTopologyError and the position rules that raise it
"""
