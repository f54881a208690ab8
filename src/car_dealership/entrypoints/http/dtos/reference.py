from car_dealership.entrypoints.http.dtos.base import CamelModel


class CarMakeDTO(CamelModel):
    id: str
    name: str
    slug: str
    country: str | None = None


class CarColorDTO(CamelModel):
    id: str
    name: str
    slug: str


class BodyTypeDTO(CamelModel):
    id: int
    name: str
    image: str
