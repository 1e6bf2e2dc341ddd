from travelglobe.models.location import Location
from travelglobe.models.setting import Setting

__all__ = ["Location", "Setting"]
