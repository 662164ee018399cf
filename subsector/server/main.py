"""FastAPI server for the subsector generator.

Every editing intent is one endpoint. Responses carry a read-only view of
the subsector; failures come back as typed errors with a matching status.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from ..engine import project_player_safe, resolve_abundance, sector_table
from ..models import Coordinate, ErrorType, GridSize, SubsectorError
from ..utils import VARIANT_FULL, VARIANT_PLAYER_SAFE
from ..utils.serialization import subsector_to_dict
from .schemas.requests import (
    EditFieldRequest,
    FactionRequest,
    FactionUpdateRequest,
    GenerateRequest,
    MoveRequest,
    RegenerateWorldRequest,
    RenameRequest,
    RerollFieldRequest,
)
from .schemas.responses import (
    ErrorResponse,
    FactionResponse,
    MapResponse,
    SubsectorResponse,
    WorldResponse,
)
from .session import EditorSession, SessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = SessionManager()

ERROR_STATUS = {
    ErrorType.EMPTY_HEX: 404,
    ErrorType.OCCUPIED_TARGET: 409,
    ErrorType.DANGLING_REFERENCE: 409,
    ErrorType.INVALID_COORDINATE: 422,
    ErrorType.INVALID_GRID_SIZE: 422,
    ErrorType.INVALID_FIELD_VALUE: 422,
    ErrorType.SCHEMA_MISMATCH: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Subsector server starting...")
    yield
    logger.info("Subsector server shutting down...")
    sessions.cleanup_all()


app = FastAPI(
    title="Subsector Generator API",
    description="Generate and edit subsectors of star systems",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SubsectorError)
async def subsector_error_handler(request: Request, exc: SubsectorError):
    status = ERROR_STATUS.get(exc.error_type, 400)
    body = ErrorResponse(error=exc.error_type.value, message=exc.message)
    return JSONResponse(status_code=status, content=body.model_dump())


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    body = ErrorResponse(error="invalid_request", message=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


def _session(session_id: str) -> EditorSession:
    session = sessions.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Subsector not found")
    return session


def _state(session: EditorSession) -> SubsectorResponse:
    return SubsectorResponse(subsectorId=session.id, seed=session.seed, state=session.get_state())


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Subsector Generator",
        "status": "operational",
        "activeSubsectors": len(sessions.sessions),
    }


@app.post("/api/subsectors", response_model=SubsectorResponse)
async def create_subsector(request: GenerateRequest):
    """Generate a new subsector and open an editing session on it.

    Example:
        POST /api/subsectors
        {"seed": 42, "worldAbundance": "dense", "name": "Spinward Reach"}
    """
    session = sessions.create_session(
        seed=request.seed,
        abundance_dm=resolve_abundance(request.worldAbundance),
        grid=GridSize(request.columns, request.rows),
        name=request.name,
    )
    return _state(session)


@app.get("/api/subsectors/{session_id}", response_model=SubsectorResponse)
async def get_subsector(session_id: str):
    return _state(_session(session_id))


@app.delete("/api/subsectors/{session_id}")
async def delete_subsector(session_id: str):
    if sessions.delete(session_id):
        return {"message": f"Subsector {session_id} deleted"}
    raise HTTPException(status_code=404, detail="Subsector not found")


@app.put("/api/subsectors/{session_id}/name", response_model=SubsectorResponse)
async def rename_subsector(session_id: str, request: RenameRequest):
    session = _session(session_id)
    session.editor.rename_subsector(request.name)
    return _state(session)


@app.post("/api/subsectors/{session_id}/generate", response_model=SubsectorResponse)
async def regenerate_all(session_id: str, request: GenerateRequest):
    """Replace the whole subsector; factions and snapshots are cleared."""
    session = _session(session_id)
    seed = request.seed if request.seed is not None else session.seed
    session.editor.generate_all(
        seed,
        resolve_abundance(request.worldAbundance),
        GridSize(request.columns, request.rows),
        request.name,
    )
    session.seed = seed
    session.snapshots.clear()
    return _state(session)


# ============================================
# WORLDS
# ============================================


@app.get("/api/subsectors/{session_id}/worlds/{hex_id}", response_model=WorldResponse)
async def get_world(session_id: str, hex_id: str):
    """Describe one hex; its current contents become the revert snapshot."""
    session = _session(session_id)
    return WorldResponse(**session.open_world(Coordinate.parse(hex_id)))


@app.post("/api/subsectors/{session_id}/worlds/{hex_id}/regenerate", response_model=SubsectorResponse)
async def regenerate_world(session_id: str, hex_id: str, request: RegenerateWorldRequest):
    session = _session(session_id)
    session.editor.regenerate_world(
        Coordinate.parse(hex_id), keep_name=request.keepName, roll_occupancy=request.rollOccupancy
    )
    return _state(session)


@app.post("/api/subsectors/{session_id}/worlds/{hex_id}/reroll", response_model=SubsectorResponse)
async def reroll_field(session_id: str, hex_id: str, request: RerollFieldRequest):
    session = _session(session_id)
    session.editor.regenerate_field(Coordinate.parse(hex_id), request.field)
    return _state(session)


@app.put("/api/subsectors/{session_id}/worlds/{hex_id}/name", response_model=SubsectorResponse)
async def rename_world(session_id: str, hex_id: str, request: RenameRequest):
    session = _session(session_id)
    session.editor.rename_world(Coordinate.parse(hex_id), request.name)
    return _state(session)


@app.patch("/api/subsectors/{session_id}/worlds/{hex_id}", response_model=SubsectorResponse)
async def edit_field(session_id: str, hex_id: str, request: EditFieldRequest):
    """Set one world attribute.

    Example:
        PATCH /api/subsectors/subsector-abc123/worlds/0304
        {"field": "population", "value": 0}
    """
    session = _session(session_id)
    session.editor.edit_field(Coordinate.parse(hex_id), request.field, request.value)
    return _state(session)


@app.post("/api/subsectors/{session_id}/worlds/{hex_id}/move", response_model=SubsectorResponse)
async def move_world(session_id: str, hex_id: str, request: MoveRequest):
    session = _session(session_id)
    session.editor.move_world(Coordinate.parse(hex_id), Coordinate.parse(request.to))
    return _state(session)


@app.delete("/api/subsectors/{session_id}/worlds/{hex_id}", response_model=SubsectorResponse)
async def delete_world(session_id: str, hex_id: str):
    session = _session(session_id)
    session.editor.delete_world(Coordinate.parse(hex_id))
    return _state(session)


@app.post("/api/subsectors/{session_id}/worlds/{hex_id}/revert", response_model=SubsectorResponse)
async def revert_world(session_id: str, hex_id: str):
    """Restore the hex to the snapshot taken when it was last opened."""
    session = _session(session_id)
    coordinate = Coordinate.parse(hex_id)
    if coordinate not in session.snapshots:
        raise HTTPException(status_code=404, detail=f"No snapshot for hex {coordinate}")
    session.editor.revert_world(coordinate, session.snapshots[coordinate])
    return _state(session)


# ============================================
# FACTIONS
# ============================================


def _faction_response(session: EditorSession, index: int) -> FactionResponse:
    return FactionResponse(index=index, faction=session.get_state()["factions"][index])


@app.post("/api/subsectors/{session_id}/factions", response_model=FactionResponse)
async def add_faction(session_id: str, request: FactionRequest):
    session = _session(session_id)
    index = session.editor.add_faction(
        request.name, request.color, [Coordinate.parse(h) for h in request.worlds]
    )
    return _faction_response(session, index)


@app.put("/api/subsectors/{session_id}/factions/{index}", response_model=FactionResponse)
async def update_faction(session_id: str, index: int, request: FactionUpdateRequest):
    session = _session(session_id)
    changes = {}
    if request.name is not None:
        changes["name"] = request.name
    if request.color is not None:
        changes["color"] = request.color
    if request.worlds is not None:
        changes["worlds"] = [Coordinate.parse(h) for h in request.worlds]
    session.editor.update_faction(index, **changes)
    return _faction_response(session, index)


@app.delete("/api/subsectors/{session_id}/factions/{index}", response_model=SubsectorResponse)
async def remove_faction(session_id: str, index: int):
    session = _session(session_id)
    session.editor.remove_faction(index)
    return _state(session)


# ============================================
# EXPORTS
# ============================================


@app.get("/api/subsectors/{session_id}/export/json")
async def export_json(session_id: str, variant: str = VARIANT_FULL):
    """Export the subsector document, full or player-safe."""
    session = _session(session_id)
    subsector = session.editor.subsector
    if variant == VARIANT_PLAYER_SAFE:
        subsector = project_player_safe(subsector)
    elif variant != VARIANT_FULL:
        raise HTTPException(status_code=422, detail=f"Unknown variant: {variant}")
    return subsector_to_dict(subsector)


@app.get("/api/subsectors/{session_id}/export/table", response_class=PlainTextResponse)
async def export_table(session_id: str):
    return sector_table(_session(session_id).editor.subsector)


@app.get("/api/subsectors/{session_id}/map", response_model=MapResponse)
async def get_map(session_id: str):
    return MapResponse(**_session(session_id).get_map())
