"""Vendor adapter implementations.

Importing this package registers every adapter with
:data:`visionai.core.vendor_adapters.vendor_registry`.
"""

from .gemini import GeminiAdapter
from .grok import GrokAdapter

__all__ = ["GeminiAdapter", "GrokAdapter"]
