"""Batch orchestration and local PDA derivation."""

from .collaborators import IdlSource, ClientWriter, FileIdlSource, FileClientWriter
from .orchestrator import ClientGenerator, GenerationResult, GenerationReport

__all__ = [
    "IdlSource",
    "ClientWriter",
    "FileIdlSource",
    "FileClientWriter",
    "ClientGenerator",
    "GenerationResult",
    "GenerationReport",
]
