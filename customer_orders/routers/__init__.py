"""
API routers for customer orders service endpoints.
"""

from . import customer_router, health_router, order_router

__all__ = ["customer_router", "order_router", "health_router"]
