"""Core data types for LINGQIAN."""

from lingqian.core.sign import (
    CATEGORY_ORDER,
    LuckTier,
    RenderRequest,
    SignRecord,
    luck_tier,
)

__all__ = [
    "CATEGORY_ORDER",
    "LuckTier",
    "RenderRequest",
    "SignRecord",
    "luck_tier",
]
