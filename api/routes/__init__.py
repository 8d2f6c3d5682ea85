"""
Route modules. Import and include in main app.
"""

from api.routes.health import router as health_router
from api.routes.students import router as students_router

__all__ = ["health_router", "students_router"]
