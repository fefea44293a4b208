"""Configuration system: declarative graph descriptions as validated objects.

Every transform unit and every topology can be described by a Pydantic
model. A config knows how to build the nn.Module it describes, so a whole
residual graph can live in a YAML file and still be type-checked before a
single tensor is allocated.
"""
from __future__ import annotations

import enum
import importlib
from typing import Annotated, Protocol, TypeVar, cast

from pydantic import AfterValidator, BaseModel
from torch import nn


T = TypeVar("T")


class ValidationType(enum.Enum):
    """Types of value validation we support."""

    SHOULD_BE_POSITIVE = "should_be_positive"
    SHOULD_BE_NON_NEGATIVE = "should_be_non_negative"


class Config(BaseModel):
    """Base class for all configuration objects.

    Provides a `build()` method that dynamically constructs the nn.Module
    corresponding to this config, and validation helpers for enforcing
    constraints on config values.
    """

    def build(self) -> nn.Module:
        """Construct the nn.Module this config describes.

        The config's `type` enum names both the implementation module
        (lower-cased member name) and the class (member value), so adding a
        new unit only requires adding the module.
        """

        class _BuildType(Protocol):
            value: str
            name: str

            def module_name(self) -> str:
                ...

        t = cast(_BuildType, getattr(self, "type"))
        class_name = t.value
        module_name = t.name.lower()
        mod = importlib.import_module(f"{t.module_name()}.{module_name}")
        cls = getattr(mod, class_name)
        return cls(self)

    @staticmethod
    def check(left: T, validation_type: ValidationType) -> T:
        """Validate a value against a constraint, raising ValueError on failure."""
        match validation_type:
            case ValidationType.SHOULD_BE_POSITIVE:
                if left <= 0:  # type: ignore[operator]
                    raise ValueError(
                        f"Validation failed: {validation_type.name}: {left!r} <= 0"
                    )
                return left
            case ValidationType.SHOULD_BE_NON_NEGATIVE:
                if left < 0:  # type: ignore[operator]
                    raise ValueError(
                        f"Validation failed: {validation_type.name}: {left!r} < 0"
                    )
                return left
            case _:
                raise ValueError(
                    f"Validation failed: unknown validation type {validation_type}"
                )

    @staticmethod
    def check_range(
        value: float,
        *,
        ge: float | None = None,
        le: float | None = None,
    ) -> float:
        """Validate a number is within a closed range."""
        v = float(value)
        if ge is not None and v < ge:
            raise ValueError(f"Validation failed: {v} < {ge} (expected >= {ge})")
        if le is not None and v > le:
            raise ValueError(f"Validation failed: {v} > {le} (expected <= {le})")
        return v


# Validated primitives for config fields
PositiveInt = Annotated[
    int,
    AfterValidator(lambda v: Config.check(v, ValidationType.SHOULD_BE_POSITIVE)),
]
NonNegativeInt = Annotated[
    int,
    AfterValidator(lambda v: Config.check(v, ValidationType.SHOULD_BE_NON_NEGATIVE)),
]
PositiveFloat = Annotated[
    float,
    AfterValidator(lambda v: Config.check(v, ValidationType.SHOULD_BE_POSITIVE)),
]
Probability = Annotated[
    float,
    AfterValidator(lambda v: Config.check_range(v, ge=0.0, le=1.0)),
]
