"""Manifest: a graph description stored in a file.

A manifest holds one topology tree and some bookkeeping fields. It's loaded
from YAML or JSON, supports `${var}` substitution for reusable templates,
and accepts shorthand type names (`linear`, `relu`, `residual`).
"""
from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel
from torch import nn

from skipgraph.compiler.validate import Validator
from skipgraph.config import PositiveInt
from skipgraph.config.resolve import Resolver, normalize_type_names
from skipgraph.config.topology import TopologyConfig
from skipgraph.console import logger


class GraphManifest(BaseModel):
    """A validated graph specification loaded from YAML or JSON."""

    version: PositiveInt
    name: str | None = None
    notes: str = ""
    topology: TopologyConfig

    @classmethod
    def from_path(cls, path: Path) -> "GraphManifest":
        """Load and validate a manifest from a JSON or YAML file.

        Variables declared in a top-level `vars` section can be referenced
        as `${var_name}` anywhere else in the file.
        """
        text = path.read_text(encoding="utf-8")
        match path.suffix.lower():
            case ".json":
                payload = json.loads(text)
            case ".yml" | ".yaml":
                payload = yaml.safe_load(text)
            case s:
                raise ValueError(f"Unsupported format '{s}'")

        if payload is None:
            raise ValueError("Manifest payload is empty.")
        if not isinstance(payload, dict):
            raise ValueError(f"Manifest payload must be a dict, got {type(payload)!r}")

        vars_payload = payload.pop("vars", None)
        if vars_payload is not None:
            if not isinstance(vars_payload, dict):
                raise ValueError(
                    f"Manifest vars must be a dict, got {type(vars_payload)!r}"
                )
            payload = Resolver(vars_payload).resolve(payload)

        payload = normalize_type_names(payload)

        manifest = cls.model_validate(payload)
        logger.info(f"Loaded manifest [path]{path}[/path]")
        return manifest

    def build(self) -> nn.Module:
        """Check widths, then build the topology module."""
        try:
            Validator().validate_topology(self.topology, path="topology")
        except ValueError as e:
            logger.error(f"Manifest '{self.name or 'unnamed'}' failed validation: {e}")
            raise
        module = self.topology.build()
        logger.success(
            f"Built {type(module).__name__}"
            + (f" '{self.name}'" if self.name else "")
        )
        return module
