"""Layer configuration with discriminated unions.

Each transform unit type (linear, normalization, activation, convolution)
has its own config class. Pydantic's discriminated unions allow YAML like
`type: LinearLayer` to automatically deserialize into the correct config
class.
"""
from __future__ import annotations

import enum
from typing import Annotated, Literal, TypeAlias

from pydantic import Field

from skipgraph.config import Config, PositiveFloat, PositiveInt, Probability


class LayerType(str, enum.Enum):
    """Enumeration of layer types for type-safe config parsing.

    The member name (lower-cased) is the implementing module under
    `skipgraph.layer`, the value is the class name.
    """

    LINEAR = "LinearLayer"
    LAYER_NORM = "LayerNormLayer"
    RMS_NORM = "RMSNormLayer"
    DROPOUT = "DropoutLayer"
    ACTIVATION = "ActivationLayer"
    CONV2D = "Conv2dLayer"
    BATCH_NORM = "BatchNormLayer"

    @staticmethod
    def module_name() -> str:
        """Return the Python module containing layer implementations."""
        return "skipgraph.layer"


class ActivationKind(str, enum.Enum):
    """Pointwise non-linearities available to ActivationLayer."""

    RELU = "relu"
    GELU = "gelu"
    SILU = "silu"
    TANH = "tanh"
    SIGMOID = "sigmoid"
    IDENTITY = "identity"


class LinearLayerConfig(Config):
    """Configuration for a simple linear projection."""

    type: Literal[LayerType.LINEAR] = LayerType.LINEAR
    d_in: PositiveInt
    d_out: PositiveInt
    bias: bool = True


class LayerNormLayerConfig(Config):
    """Configuration for standard LayerNorm."""

    type: Literal[LayerType.LAYER_NORM] = LayerType.LAYER_NORM
    d_model: PositiveInt
    eps: PositiveFloat = 1e-5


class RMSNormLayerConfig(Config):
    """Configuration for RMSNorm."""

    type: Literal[LayerType.RMS_NORM] = LayerType.RMS_NORM
    d_model: PositiveInt
    eps: PositiveFloat = 1e-5
    elementwise_affine: bool = True


class DropoutLayerConfig(Config):
    """Configuration for dropout regularization."""

    type: Literal[LayerType.DROPOUT] = LayerType.DROPOUT
    p: Probability = 0.0


class ActivationLayerConfig(Config):
    """Configuration for a parameter-free pointwise activation."""

    type: Literal[LayerType.ACTIVATION] = LayerType.ACTIVATION
    kind: ActivationKind = ActivationKind.RELU


class Conv2dLayerConfig(Config):
    """Configuration for a 2D convolution over (B, C, H, W) inputs.

    Kernel, stride, padding and dilation are given per spatial axis as
    (height, width) pairs.
    """

    type: Literal[LayerType.CONV2D] = LayerType.CONV2D
    in_channels: PositiveInt
    out_channels: PositiveInt
    kernel_size: tuple[PositiveInt, PositiveInt]
    stride: tuple[PositiveInt, PositiveInt] = (1, 1)
    padding: tuple[int, int] = (0, 0)
    dilation: tuple[PositiveInt, PositiveInt] = (1, 1)
    bias: bool = True


class BatchNormLayerConfig(Config):
    """Configuration for batch normalization.

    n_dims selects BatchNorm1d (inputs (B, C) or (B, C, L)) or BatchNorm2d
    (inputs (B, C, H, W)).
    """

    type: Literal[LayerType.BATCH_NORM] = LayerType.BATCH_NORM
    num_features: PositiveInt
    n_dims: Literal[1, 2] = 2
    eps: PositiveFloat = 1e-5
    momentum: Probability = 0.1
    affine: bool = True
    track_running_stats: bool = True


# Union type for any layer config, with automatic deserialization
LayerConfig: TypeAlias = Annotated[
    LinearLayerConfig
    | LayerNormLayerConfig
    | RMSNormLayerConfig
    | DropoutLayerConfig
    | ActivationLayerConfig
    | Conv2dLayerConfig
    | BatchNormLayerConfig,
    Field(discriminator="type"),
]
