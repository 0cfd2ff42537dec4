"""Routes for the role catalog and configuration validation."""
from fastapi import APIRouter, HTTPException

from core.errors import RoleNotFoundError
from core.roles import RoleDefinition, role_registry
from models.requests import ValidateRequest
from models.validation import ConfigurationReport
from services.edge_cases import detect_configuration_edge_case
from services.validation import validate

router = APIRouter()


@router.get("/api/roles", response_model=list[RoleDefinition])
async def list_roles():
    """List every role in display order."""
    return role_registry.get_roles()


@router.get("/api/roles/defaults")
async def default_configuration():
    """Recommended count for every special role."""
    return role_registry.default_configuration()


@router.get("/api/roles/{role_id}", response_model=RoleDefinition)
async def get_role(role_id: str):
    """Get a single role.

    Raises:
        HTTPException: If the role does not exist
    """
    try:
        return role_registry.get_role_by_id(role_id)
    except RoleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/api/validate", response_model=ConfigurationReport, response_model_by_alias=True)
async def validate_configuration(request: ValidateRequest):
    """Validate a role configuration against a player count.

    Configuration problems are part of the response body, never an HTTP error.
    A valid configuration also carries its edge case, if it has one.
    """
    result = validate(request.role_counts, request.total_players)
    edge_case = None
    if result.is_valid:
        edge_case = detect_configuration_edge_case(request.role_counts, request.total_players)
    return ConfigurationReport(**result.model_dump(), edge_case=edge_case)
