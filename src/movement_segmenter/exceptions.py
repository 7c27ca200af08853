"""
Custom exceptions for the Movement Segmenter package.

This module defines all custom exceptions used throughout the application,
providing clear error hierarchies and specific error types for different scenarios.
"""


class MovementSegmenterError(Exception):
    """Base exception for all Movement Segmenter errors."""


class ConfigurationError(MovementSegmenterError):
    """Raised when there is an issue with configuration settings."""


class ValidationError(MovementSegmenterError):
    """Raised when input data fails validation."""


class InvalidParameterError(ValidationError):
    """Raised when a parameter is out of range or not finite."""


class DimensionMismatchError(ValidationError):
    """Raised when an auxiliary sequence does not match the signal's length."""


class EmptyInputError(InvalidParameterError):
    """Raised when a zero-length signal, sub-band or chunk list is supplied."""


class DataLoadError(MovementSegmenterError):
    """Raised when there is an error loading track files."""


class ProcessingError(MovementSegmenterError):
    """Raised when there is an error running the segmentation pipeline."""
