"""
Core module for application configuration and the S-P table engine.

The engine lives in sptable.core.sp and has no dependency on the settings
or the web stack; import it directly: from sptable.core.sp import ...
"""
from .config import settings

__all__ = ["settings"]
