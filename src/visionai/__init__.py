"""VisionAI - facade recoloring through multimodal generation APIs."""

__version__ = "0.3.0"

from visionai.core.config import VisionAIConfig
from visionai.core.vendor_adapters import VendorAdapterBase, vendor_registry

# Import adapters to ensure they're registered
from visionai.core.adapters import GeminiAdapter, GrokAdapter  # noqa: F401

__all__ = [
    "VendorAdapterBase",
    "vendor_registry",
    "VisionAIConfig",
    "GeminiAdapter",
    "GrokAdapter",
]
