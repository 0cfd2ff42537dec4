"""Routes for allocating roles and revealing them one player at a time."""
import logging

from fastapi import APIRouter, HTTPException

from core.errors import AssignmentError
from core.session_manager import session_manager
from models.requests import CreateSessionRequest
from models.responses import RevealResponse, SessionStateResponse
from services.edge_cases import detect_configuration_edge_case, validate_player_names
from services.reveal import all_players_revealed, can_reveal, next_player_to_reveal, reveal_player
from services.validation import validate

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_session_or_404(session_id: str):
    session = session_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/api/sessions", response_model=SessionStateResponse, status_code=201)
async def create_session(request: CreateSessionRequest):
    """Validate the configuration and allocate roles.

    Returns:
        The new session with every role hidden

    Raises:
        HTTPException: If names are invalid, the configuration has errors, or
            warnings were not acknowledged
    """
    names_ok, error = validate_player_names(request.player_names)
    if not names_ok:
        raise HTTPException(status_code=400, detail=error)

    result = validate(request.role_counts, len(request.player_names))
    if not result.is_valid:
        raise HTTPException(status_code=422, detail=result.messages())
    if result.requires_confirmation and not request.acknowledge_warnings:
        edge_case = detect_configuration_edge_case(
            request.role_counts, len(request.player_names)
        )
        if edge_case is not None:
            edge_case = edge_case.model_dump(mode="json", by_alias=True)
        raise HTTPException(
            status_code=409,
            detail={
                "warnings": [warning.message for warning in result.warnings],
                "edgeCase": edge_case,
            },
        )

    try:
        session = session_manager.create_session(request.player_names, request.role_counts)
    except AssignmentError:
        logger.exception("Allocation failed")
        raise HTTPException(status_code=500, detail="Role allocation failed, please try again")

    return session.get_public_state()


@router.get("/api/stats")
async def get_stats():
    """Counts of the sessions currently held in memory."""
    return session_manager.get_stats()


@router.get("/api/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session(session_id: str):
    """Get a session's state with every role hidden."""
    return _get_session_or_404(session_id).get_public_state()


@router.post("/api/sessions/{session_id}/reallocate", response_model=SessionStateResponse)
async def reallocate(session_id: str):
    """Re-run the allocation with the same players and configuration."""
    session = _get_session_or_404(session_id)
    try:
        session.reallocate()
    except AssignmentError:
        logger.exception("Re-allocation failed for session %s", session_id)
        raise HTTPException(status_code=500, detail="Role allocation failed, please try again")
    return session.get_public_state()


@router.delete("/api/sessions/{session_id}", status_code=204)
async def reset_session(session_id: str):
    """Discard a session and its assignment."""
    _get_session_or_404(session_id)
    session_manager.remove_session(session_id)


@router.post(
    "/api/sessions/{session_id}/players/{player_id}/reveal", response_model=RevealResponse
)
async def reveal(session_id: str, player_id: int):
    """Reveal one player's role, enforcing input order.

    Raises:
        HTTPException: If the session or player is unknown, or it is not
            this player's turn
    """
    session = _get_session_or_404(session_id)

    allowed, error = can_reveal(session, player_id)
    if not allowed:
        status = 404 if error == "Player not found" else 409
        raise HTTPException(status_code=status, detail=error)

    player = reveal_player(session, player_id)
    upcoming = next_player_to_reveal(session)

    return {
        "player": player.to_dict(include_role=True),
        "next_player_id": upcoming.id if upcoming else None,
        "all_revealed": all_players_revealed(session),
    }
