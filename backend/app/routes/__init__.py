from .programs import router as programs_router
from .redemption import router as redemption_router
from .insights import router as insights_router

__all__ = [
    "programs_router",
    "redemption_router",
    "insights_router",
]
