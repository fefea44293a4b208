"""skipgraph: composable residual graphs of PyTorch modules.

A graph is a backbone of transform units (any nn.Module) plus shortcut
edges that inject earlier results, optionally projected, into later
accumulators, and scale edges that rescale an accumulator before its unit
runs. Graphs are plain nn.Modules, so they train, nest and serialize like
any other module.

Core pieces:
- topology.residual: ResidualTopology, the assembler and evaluator
- config: Pydantic configs and YAML/JSON manifests describing graphs
- compiler: static width checks over graph configs
- layer: config-constructible transform units
"""
