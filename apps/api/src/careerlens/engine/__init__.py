"""Execution engine."""

from careerlens.engine.generator import CareerGenerator, GenerationResult

__all__ = ["CareerGenerator", "GenerationResult"]
