from travelglobe.routers.airport import airport_router
from travelglobe.routers.auth import auth_router
from travelglobe.routers.flight import flight_router
from travelglobe.routers.location import location_router
from travelglobe.routers.setting import setting_router

__all__ = ["airport_router", "auth_router", "flight_router", "location_router", "setting_router"]
