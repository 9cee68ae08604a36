"""Utility modules for textops."""

from utils.string_utils import (
    InvalidArgumentError,
    abbreviate,
    initials,
    swap_case,
    wrap,
)

__all__ = [
    'InvalidArgumentError',
    'abbreviate',
    'initials',
    'swap_case',
    'wrap',
]
