"""
Dockerfile generation.

Provides:
- Generator: fixed Dockerfile assembly
- Ecosystem: runtime-specific hooks (base class is the ``deb`` ecosystem)
- PythonEcosystem, REcosystem: built-in ecosystems
- Registry and factory for selecting an ecosystem
"""

from .base import MANAGED_DOCKERFILE, MANAGED_MARKER, Generator
from .ecosystem import Ecosystem, GenerationContext
from .python import PythonEcosystem
from .r import REcosystem
from .registry import EcosystemRegistry, create_generator, get_registry

__all__ = [
    "MANAGED_DOCKERFILE",
    "MANAGED_MARKER",
    "Generator",
    "Ecosystem",
    "GenerationContext",
    "PythonEcosystem",
    "REcosystem",
    "EcosystemRegistry",
    "create_generator",
    "get_registry",
]
