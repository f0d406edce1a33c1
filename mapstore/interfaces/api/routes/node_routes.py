# mapstore/interfaces/api/routes/node_routes.py
from fastapi import APIRouter, Depends, HTTPException

from mapstore.application.dtos.map_dto import ClientNodeDTO, NodeImportDTO
from mapstore.application.services.map_service import MapService
from mapstore.domain.map.errors import InvalidTreeReferenceError, MalformedUUIDError
from mapstore.interfaces.api.dependencies import get_map_service

router = APIRouter()


@router.get("/maps/{uuid_raw}/nodes", response_model=list[ClientNodeDTO])
def list_nodes(
    uuid_raw: str,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> list[ClientNodeDTO]:
    map_id = _require_map(service, uuid_raw)
    return [ClientNodeDTO.from_domain(n) for n in service.find_nodes(map_id)]


@router.post("/maps/{uuid_raw}/nodes", response_model=NodeImportDTO)
def add_nodes(
    uuid_raw: str,
    client_nodes: list[ClientNodeDTO],
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> NodeImportDTO:
    map_id = _require_map(service, uuid_raw)
    result = service.import_nodes_from_client(map_id, client_nodes)
    return NodeImportDTO.from_domain(result)


@router.put("/maps/{uuid_raw}/nodes/{node_id}", response_model=ClientNodeDTO)
def update_node(
    uuid_raw: str,
    node_id: str,
    client_node: ClientNodeDTO,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> ClientNodeDTO:
    if client_node.id != node_id:
        raise HTTPException(status_code=422, detail="Id do corpo difere do path")
    map_id = _require_map(service, uuid_raw)
    try:
        node = service.update_node(map_id, client_node)
    except InvalidTreeReferenceError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err

    if node is None:
        raise HTTPException(status_code=404, detail="No nao encontrado")
    return ClientNodeDTO.from_domain(node)


@router.delete("/maps/{uuid_raw}/nodes/{node_id}", response_model=ClientNodeDTO)
def remove_node(
    uuid_raw: str,
    node_id: str,
    service: MapService = Depends(get_map_service),  # noqa: B008
) -> ClientNodeDTO:
    map_id = _require_map(service, uuid_raw)
    node = service.remove_node(ClientNodeDTO(id=node_id), map_id)
    if node is None:
        raise HTTPException(status_code=404, detail="No nao encontrado")
    return ClientNodeDTO.from_domain(node)


def _require_map(service: MapService, uuid_raw: str) -> str:
    """Id canonico do mapa; 422 para UUID malformado, 404 se nao existe."""
    try:
        mind_map = service.find_map(uuid_raw)
    except MalformedUUIDError as err:
        raise HTTPException(status_code=422, detail="UUID invalido") from err
    if mind_map is None:
        raise HTTPException(status_code=404, detail="Mapa nao encontrado")
    return mind_map.id
