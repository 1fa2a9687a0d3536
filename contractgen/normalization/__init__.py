from contractgen.normalization.base import BaseValueNormalizer
from contractgen.normalization.normalizer import ValueNormalizer

__all__ = ["BaseValueNormalizer", "ValueNormalizer"]
