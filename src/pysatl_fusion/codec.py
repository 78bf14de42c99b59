"""
Snapshot Codec
==============

Lossless JSON serialization of a distribution graph together with the display
flags of a session.

Format
------
.. code-block:: json

    {
      "distributions": {
        "0": {"id": 0, "name": "Gaussian 1", "mean": 0.0, "std_dev": 1.0,
              "parent_ids": [], "is_product": false}
      },
      "next_id": 1,
      "show_shading": true,
      "shading_opacity": 0.3,
      "show_std_markers": true
    }

Products keep their stored values; nothing is recomputed on load. Decoding
is validated against the pydantic :class:`SnapshotModel` schema; unknown
fields are ignored. Malformed input raises :class:`~pysatl_fusion.errors.DecodeError`.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    StrictBool,
    StrictStr,
    ValidationError,
    model_validator,
)

from pysatl_fusion.config import DEFAULT_CONFIG
from pysatl_fusion.distributions.distribution import GaussianDistribution
from pysatl_fusion.errors import DecodeError
from pysatl_fusion.graph.graph import DistributionGraph
from pysatl_fusion.types import NodeKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pysatl_fusion.config import FusionConfig
    from pysatl_fusion.types import NodeId

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DisplaySettings:
    """
    Display flags stored alongside the graph.

    Parameters
    ----------
    show_shading : bool, default True
        Whether the area under each curve is filled.
    shading_opacity : float, default 0.3
        Fill opacity in ``[0, 1]``.
    show_std_markers : bool, default True
        Whether standard-deviation markers are drawn.
    """

    show_shading: bool = True
    shading_opacity: float = 0.3
    show_std_markers: bool = True

    def __post_init__(self) -> None:
        if not 0.0 <= self.shading_opacity <= 1.0:
            raise ValueError(f"Shading opacity must be in [0, 1], got {self.shading_opacity}")


@dataclass(frozen=True, slots=True)
class Snapshot:
    """
    Flat, serializable state of a session.

    Parameters
    ----------
    distributions : Mapping[NodeId, GaussianDistribution]
        Nodes keyed by id.
    next_id : NodeId
        Next identifier the graph will allocate.
    display : DisplaySettings
        Display flags.
    """

    distributions: Mapping[NodeId, GaussianDistribution] = field(default_factory=dict)
    next_id: NodeId = 0
    display: DisplaySettings = field(default_factory=DisplaySettings)

    @classmethod
    def from_graph(
        cls, graph: DistributionGraph, display: DisplaySettings | None = None
    ) -> Snapshot:
        return cls(
            distributions=dict(graph.nodes),
            next_id=graph.next_id,
            display=display or DisplaySettings(),
        )

    def to_graph(self, config: FusionConfig = DEFAULT_CONFIG) -> DistributionGraph:
        """Rebuild a graph holding exactly the stored nodes."""
        return DistributionGraph(self.distributions.values(), self.next_id, config=config)


# --------------------------------------------------------------------------- #
# Encoding
# --------------------------------------------------------------------------- #


def _encode_node(node: GaussianDistribution) -> dict[str, Any]:
    return {
        "id": node.id,
        "name": node.name,
        "mean": node.mean,
        "std_dev": node.std_dev,
        "parent_ids": list(node.parent_ids),
        "is_product": node.is_product,
    }


def to_dict(snapshot: Snapshot) -> dict[str, Any]:
    """Plain JSON-compatible representation of a snapshot."""
    return {
        "distributions": {
            str(node_id): _encode_node(node) for node_id, node in snapshot.distributions.items()
        },
        "next_id": snapshot.next_id,
        "show_shading": snapshot.display.show_shading,
        "shading_opacity": snapshot.display.shading_opacity,
        "show_std_markers": snapshot.display.show_std_markers,
    }


def encode(snapshot: Snapshot, *, indent: int | None = 2) -> str:
    """
    Serialize a snapshot to JSON text.

    Parameters
    ----------
    snapshot : Snapshot
        State to serialize.
    indent : int or None, default 2
        Indentation passed to :func:`json.dumps`; ``None`` for compact output.
    """
    text = json.dumps(to_dict(snapshot), indent=indent, allow_nan=False)
    logger.debug("Encoded snapshot with %d distributions", len(snapshot.distributions))
    return text


# --------------------------------------------------------------------------- #
# Decoding
# --------------------------------------------------------------------------- #

_Id = Annotated[int, Field(strict=True, ge=0)]
"""Strict non-negative integer identifier."""


class NodeRecord(BaseModel):
    """Stored form of one distribution."""

    model_config = ConfigDict(frozen=True)

    id: _Id
    name: StrictStr
    mean: float = Field(strict=True, allow_inf_nan=False)
    std_dev: float = Field(strict=True, gt=0.0, allow_inf_nan=False)
    parent_ids: list[_Id] = Field(strict=True)
    is_product: StrictBool

    def to_distribution(self) -> GaussianDistribution:
        return GaussianDistribution(
            id=self.id,
            name=self.name,
            mean=self.mean,
            std_dev=self.std_dev,
            parent_ids=tuple(self.parent_ids),
            kind=NodeKind.PRODUCT if self.is_product else NodeKind.LEAF,
        )


class SnapshotModel(BaseModel):
    """
    Schema of a stored session.

    Distribution keys are JSON object keys and therefore text; they are
    parsed as non-negative integers and must equal the stored ``id``.
    Unknown fields are ignored.
    """

    distributions: dict[NonNegativeInt, NodeRecord]
    next_id: _Id
    show_shading: StrictBool
    shading_opacity: float = Field(strict=True, ge=0.0, le=1.0, allow_inf_nan=False)
    show_std_markers: StrictBool

    @model_validator(mode="after")
    def check_ids(self) -> SnapshotModel:
        for key, record in self.distributions.items():
            if key != record.id:
                raise ValueError(
                    f"distribution {key} stores id {record.id}, which does not match its key"
                )
        if self.distributions and self.next_id <= max(self.distributions):
            raise ValueError(f"next_id {self.next_id} must exceed every stored id")
        return self

    def to_snapshot(self) -> Snapshot:
        return Snapshot(
            distributions={
                key: record.to_distribution() for key, record in self.distributions.items()
            },
            next_id=self.next_id,
            display=DisplaySettings(
                show_shading=self.show_shading,
                shading_opacity=self.shading_opacity,
                show_std_markers=self.show_std_markers,
            ),
        )


def from_dict(data: Any) -> Snapshot:
    """
    Build a snapshot from its plain representation.

    Raises
    ------
    DecodeError
        If the data does not describe a valid snapshot.
    """
    try:
        model = SnapshotModel.model_validate(data)
    except (ValidationError, OverflowError) as exc:
        raise DecodeError(f"Failed to parse session: {exc}") from exc
    return model.to_snapshot()


def decode(text: str | bytes) -> Snapshot:
    """
    Parse JSON text produced by :func:`encode`.

    Raises
    ------
    DecodeError
        If the text is not valid JSON or does not describe a valid snapshot.
    """
    try:
        model = SnapshotModel.model_validate_json(text)
    except (ValueError, OverflowError, RecursionError) as exc:
        # pydantic's ValidationError is a ValueError
        raise DecodeError(f"Failed to parse session: {exc}") from exc

    snapshot = model.to_snapshot()
    logger.debug("Decoded snapshot with %d distributions", len(snapshot.distributions))
    return snapshot


def save(snapshot: Snapshot, path: str | Path) -> None:
    """Write a snapshot to ``path`` as UTF-8 JSON."""
    Path(path).write_text(encode(snapshot), encoding="utf-8")


def load(path: str | Path) -> Snapshot:
    """Read a snapshot written by :func:`save`."""
    return decode(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "DisplaySettings",
    "Snapshot",
    "NodeRecord",
    "SnapshotModel",
    "encode",
    "decode",
    "to_dict",
    "from_dict",
    "save",
    "load",
]
