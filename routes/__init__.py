from .health import router as health_router
from .vehicle_damage import router as vehicle_damage_router
from .chat import router as chat_router

__all__ = ["health_router", "vehicle_damage_router", "chat_router"]
