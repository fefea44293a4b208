"""Transform units: the leaves a graph is composed from.

Each unit is a config-constructed nn.Module mapping a tensor to a tensor.
The composition engine never looks inside them; any nn.Module works as a
unit, these are simply the ones a YAML manifest can name.
"""
