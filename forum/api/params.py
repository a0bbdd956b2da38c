"""Path parameter parsing shared by the resource routers."""

from fastapi import HTTPException, status

from forum.services.validation import parse_entity_id


def parse_path_id(raw: str, entity: str) -> int:
    """Return raw as an entity id, or raise 400 'Invalid <entity> ID'."""
    entity_id = parse_entity_id(raw)
    if entity_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {entity} ID",
        )
    return entity_id
