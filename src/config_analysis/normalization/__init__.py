"""Conversion of raw analysis output into result tree models."""

from .result_normalizer import ResultNormalizationError, ResultNormalizer, snake_case

__all__ = ["ResultNormalizationError", "ResultNormalizer", "snake_case"]
