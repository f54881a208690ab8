from car_dealership.infra.db.models.base import Base
from car_dealership.infra.db.models.car import CarRow
from car_dealership.infra.db.models.car_color import CarColorRow
from car_dealership.infra.db.models.car_make import CarMakeRow

__all__ = ["Base", "CarColorRow", "CarMakeRow", "CarRow"]
