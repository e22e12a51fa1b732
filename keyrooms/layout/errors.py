"""Generation failure taxonomy.

Per-layer failures (``NoAvailableSpace``, ``InsufficientKeyHolders``) are
absorbed by the retry loop; only ``RetriesExhausted`` and ``FinalizeError``
escape ``generate``.
"""
from __future__ import annotations


class GenerationError(Exception):
    code = "generation"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoAvailableSpace(GenerationError):
    code = "no_space"

    def __init__(self, layer: int):
        super().__init__(f"No available spaces for layer {layer}")
        self.layer = layer


class InsufficientKeyHolders(GenerationError):
    code = "key_holders"

    def __init__(self, layer: int, required: int, available: int):
        super().__init__(
            f"Layer {layer} needs {required} keys but only {available} rooms can hold one"
        )
        self.layer = layer
        self.required = required
        self.available = available


class FinalizeError(GenerationError):
    code = "finalize"


class RetriesExhausted(GenerationError):
    code = "retries_exhausted"

    def __init__(self, retries: int):
        super().__init__(f"Failed to generate after {retries} retries")
        self.retries = retries


__all__ = [
    "GenerationError",
    "NoAvailableSpace",
    "InsufficientKeyHolders",
    "FinalizeError",
    "RetriesExhausted",
]
