"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: the core depends on abstractions.
"""

from core.interfaces.hosting import HostingProvider
from core.interfaces.vcs import VersionControl

__all__ = ["HostingProvider", "VersionControl"]
