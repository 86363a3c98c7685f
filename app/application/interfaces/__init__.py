"""Application interfaces (ports): cache and CMS protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.services import ICacheService, ICmsClient

__all__ = [
    "ICacheService",
    "ICmsClient",
]
