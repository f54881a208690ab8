from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from car_dealership.domain.reference import body_types
from car_dealership.entrypoints.http.dependencies import (
    get_list_car_colors_use_case,
    get_list_car_makes_use_case,
)
from car_dealership.entrypoints.http.dtos.reference import BodyTypeDTO, CarColorDTO, CarMakeDTO
from car_dealership.entrypoints.http.error_responses import FailureResponse, SuccessResponse
from car_dealership.entrypoints.http.mappers.envelope_mapper import to_json_response
from car_dealership.entrypoints.http.mappers.reference_mapper import ReferenceMapper
from car_dealership.use_cases.envelope import run_action
from car_dealership.use_cases.list_car_options import ListCarColors, ListCarMakes


router = APIRouter(tags=["Reference data"])


@router.get(
    "/makes",
    response_model=SuccessResponse[list[CarMakeDTO]],
    summary="List car makes",
    description="Every make in the catalog, ordered by name.",
    responses={503: {"model": FailureResponse}},
)
def list_makes(use_case: ListCarMakes = Depends(get_list_car_makes_use_case)) -> JSONResponse:
    return to_json_response(use_case.execute(), ReferenceMapper.to_makes_response)


@router.get(
    "/colors",
    response_model=SuccessResponse[list[CarColorDTO]],
    summary="List car colours",
    description="Every colour in the catalog, ordered by name.",
    responses={503: {"model": FailureResponse}},
)
def list_colors(use_case: ListCarColors = Depends(get_list_car_colors_use_case)) -> JSONResponse:
    return to_json_response(use_case.execute(), ReferenceMapper.to_colors_response)


@router.get(
    "/body-types",
    response_model=SuccessResponse[list[BodyTypeDTO]],
    summary="List body types",
    description="Static body types with their illustration paths.",
)
def list_body_types() -> JSONResponse:
    result = run_action(body_types, name="list_body_types")
    return to_json_response(result, ReferenceMapper.to_body_types_response)
