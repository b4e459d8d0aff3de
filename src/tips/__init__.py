from .config import ConfigurationError, TipConfig
from .service import (
    FALLBACK_TIPS,
    MindfulnessTipProvider,
    TipProviderLike,
    build_tip_prompt,
)

__all__ = [
    "ConfigurationError",
    "FALLBACK_TIPS",
    "MindfulnessTipProvider",
    "TipConfig",
    "TipProviderLike",
    "build_tip_prompt",
]
