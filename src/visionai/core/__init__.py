"""Core functionality for the recolor service.

- **VisionAIConfig**: Configuration management using Pydantic Settings
- **Errors**: Per-request failure taxonomy with HTTP status codes
- **DataURL**: Parsing and rendering of base64 image data URLs
- **build_recolor_prompt**: The fixed recolor instruction
- **Vendor Adapters**: One adapter per external generation API
- **vendor_registry**: Registry for discovering and instantiating adapters

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration, VISIONAI_ prefix plus the vendor
     key names GROK_API_KEY / GEMINI_API_KEY
   - Built once at startup and passed explicitly

2. **Translation Layer** (data_url.py, prompt.py):
   - Pure helpers with no I/O

3. **Vendor Adapter Layer** (vendor_adapters.py, adapters/):
   - Unified ``generate(original, mask, color)`` interface
   - Vendor-specific request building and response parsing
"""

from visionai.core.config import VisionAIConfig
from visionai.core.data_url import DataURL, parse_data_url
from visionai.core.prompt import build_recolor_prompt
from visionai.core.vendor_adapters import RecolorJob, VendorAdapterBase, vendor_registry

# Import adapters to ensure they're registered
# This must happen after vendor_registry is imported
from visionai.core.adapters import GeminiAdapter, GrokAdapter  # noqa: F401, E402

__all__ = [
    "DataURL",
    "RecolorJob",
    "VendorAdapterBase",
    "VisionAIConfig",
    "build_recolor_prompt",
    "parse_data_url",
    "vendor_registry",
]
