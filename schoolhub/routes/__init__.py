from .auth import router as auth_router
from .schools import router as schools_router
from .examinations import router as examinations_router
from .results import router as results_router


__all__ = [
    "auth_router",
    "schools_router",
    "examinations_router",
    "results_router"
]
