from __future__ import annotations

from typing import Iterable

from car_dealership.domain.car import CarColor, CarMake
from car_dealership.domain.reference import BodyType
from car_dealership.entrypoints.http.dtos.reference import BodyTypeDTO, CarColorDTO, CarMakeDTO


class ReferenceMapper:
    """Maps makes, colours and body types to REST DTOs."""

    @staticmethod
    def to_make_response(make: CarMake) -> CarMakeDTO:
        return CarMakeDTO(id=make.id, name=make.name, slug=make.slug, country=make.country)

    @staticmethod
    def to_makes_response(makes: Iterable[CarMake]) -> list[CarMakeDTO]:
        return [ReferenceMapper.to_make_response(make) for make in makes]

    @staticmethod
    def to_color_response(color: CarColor) -> CarColorDTO:
        return CarColorDTO(id=color.id, name=color.name, slug=color.slug)

    @staticmethod
    def to_colors_response(colors: Iterable[CarColor]) -> list[CarColorDTO]:
        return [ReferenceMapper.to_color_response(color) for color in colors]

    @staticmethod
    def to_body_types_response(body_types: Iterable[BodyType]) -> list[BodyTypeDTO]:
        return [BodyTypeDTO(id=body.id, name=body.name, image=body.image) for body in body_types]
