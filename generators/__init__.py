"""Sample catalog generation (LLM-backed, with a built-in seed fallback)."""

from .data_factory import DataGenerator, seed_catalog

__all__ = ["DataGenerator", "seed_catalog"]
