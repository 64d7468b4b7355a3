"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for hashtree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Input & Serialization Errors
    INVALID_INPUT = "INVALID_INPUT"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Tree Errors
    STRUCTURAL_MISMATCH = "STRUCTURAL_MISMATCH"

    # Sequence Errors
    STALE_ITERATION = "STALE_ITERATION"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Lets callers pass errors around (or serialize them) without
    raising exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hashtree errors.

    This exception carries structured error information and can be
    converted to/from HashTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputException(HashTreeException, ValueError):
    """Exception raised for null/empty inputs and arguments foreign to a tree."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if argument:
            full_details["argument"] = argument
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_INPUT,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(HashTreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class StructuralMismatchException(HashTreeException, ValueError):
    """Exception raised when two trees being compared have different shapes."""

    def __init__(
        self,
        message: str,
        depth: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if depth is not None:
            full_details["depth"] = depth
        super().__init__(
            message=message,
            code=ErrorCodes.STRUCTURAL_MISMATCH,
            details=full_details,
            retryable=False,
        )


class StaleIterationException(HashTreeException, RuntimeError):
    """
    Exception raised when a sequence is modified while being iterated.

    Not retryable: the caller must obtain a fresh iterator.
    """

    def __init__(
        self,
        message: str,
        expected_modifications: int | None = None,
        actual_modifications: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if expected_modifications is not None:
            details["expected_modifications"] = expected_modifications
        if actual_modifications is not None:
            details["actual_modifications"] = actual_modifications
        super().__init__(
            message=message,
            code=ErrorCodes.STALE_ITERATION,
            details=details,
            retryable=False,
        )
