"""
Module 01 - Schemas & Canonicalization
File: nodes.py

Purpose: Flat, index-linked representation of a Merkle node graph.
A tree exports itself as a list of FlatNode records in breadth-first
order with the root at index 0.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FlatNode(BaseModel):
    """One node of a flattened Merkle tree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    digest: str = Field(
        ...,
        description="Hex digest of the node; empty string for padding",
    )
    is_leaf: bool = Field(..., description="True if the node has no children")
    left: Optional[int] = Field(
        default=None,
        ge=0,
        description="Array index of the left child",
    )
    right: Optional[int] = Field(
        default=None,
        ge=0,
        description="Array index of the right child",
    )

    @model_validator(mode="after")
    def _check_children(self) -> "FlatNode":
        has_left = self.left is not None
        has_right = self.right is not None
        if self.is_leaf and (has_left or has_right):
            raise ValueError("leaf nodes cannot reference children")
        if not self.is_leaf and not (has_left and has_right):
            raise ValueError("internal nodes must reference exactly two children")
        return self
