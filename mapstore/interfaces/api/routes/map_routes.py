# mapstore/interfaces/api/routes/map_routes.py
from fastapi import APIRouter, Depends, HTTPException, Response, status

from mapstore.application.dtos.map_dto import (
    AdminMapEntryDTO,
    ClientMapDTO,
    ClientMapOptionsDTO,
    CreateMapRequestDTO,
)
from mapstore.application.services.map_service import MapService
from mapstore.domain.map.errors import MalformedUUIDError
from mapstore.interfaces.api.dependencies import get_map_service

router = APIRouter()


@router.post("/maps", response_model=AdminMapEntryDTO, status_code=status.HTTP_201_CREATED)
def create_map(
    payload: CreateMapRequestDTO | None = None,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> AdminMapEntryDTO:
    root_node = payload.root_node if payload else None
    mind_map = service.create_empty_map(root_node)
    entry = service.export_admin_entry(mind_map, root_node.name if root_node else None)
    return AdminMapEntryDTO.from_domain(entry)


@router.get("/maps/{uuid_raw}", response_model=ClientMapDTO)
def get_map(
    uuid_raw: str,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> ClientMapDTO:
    try:
        client_map = service.export_map_to_client(uuid_raw)
    except MalformedUUIDError as err:
        raise HTTPException(status_code=422, detail="UUID invalido") from err

    if client_map is None:
        raise HTTPException(status_code=404, detail="Mapa nao encontrado")
    return client_map


@router.put("/maps/{uuid_raw}", response_model=ClientMapDTO)
def put_map(
    uuid_raw: str,
    client_map: ClientMapDTO,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> ClientMapDTO:
    if client_map.uuid != uuid_raw:
        raise HTTPException(status_code=422, detail="UUID do corpo difere do path")
    try:
        updated = service.update_map(client_map)
    except MalformedUUIDError as err:
        raise HTTPException(status_code=422, detail="UUID invalido") from err

    if updated is None:
        raise HTTPException(status_code=404, detail="Mapa nao encontrado")
    return _export_or_404(service, updated.id)


@router.put("/maps/{uuid_raw}/options", response_model=ClientMapDTO)
def put_map_options(
    uuid_raw: str,
    options: ClientMapOptionsDTO,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> ClientMapDTO:
    try:
        updated = service.update_map_options(uuid_raw, options.to_domain())
    except MalformedUUIDError as err:
        raise HTTPException(status_code=422, detail="UUID invalido") from err
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err

    if updated is None:
        raise HTTPException(status_code=404, detail="Mapa nao encontrado")
    return _export_or_404(service, updated.id)


@router.delete("/maps/{uuid_raw}", status_code=status.HTTP_204_NO_CONTENT)
def delete_map(
    uuid_raw: str,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> Response:
    try:
        service.delete_map(uuid_raw)
    except MalformedUUIDError as err:
        raise HTTPException(status_code=422, detail="UUID invalido") from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _export_or_404(service: MapService, map_id: str) -> ClientMapDTO:
    client_map = service.export_map_to_client(map_id)
    if client_map is None:
        raise HTTPException(status_code=404, detail="Mapa nao encontrado")
    return client_map
