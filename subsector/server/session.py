"""Editing session management for the HTTP boundary."""

import logging
import uuid
from dataclasses import asdict, dataclass, field

from ..engine import SubsectorEditor, map_glyphs, world_details
from ..engine.display import map_title
from ..models import Coordinate, GridSize, World
from ..utils.serialization import subsector_to_dict

logger = logging.getLogger(__name__)


@dataclass
class EditorSession:
    """One subsector being edited.

    Holds the editor plus the last snapshot taken of each hex, which is what
    a revert restores.
    """

    id: str
    seed: int
    editor: SubsectorEditor
    snapshots: dict[Coordinate, World | None] = field(default_factory=dict)

    def get_state(self) -> dict:
        """Read-only view of the whole subsector (full document form)."""
        return subsector_to_dict(self.editor.subsector)

    def open_world(self, coordinate: Coordinate) -> dict:
        """Describe one hex and remember its current contents for revert."""
        snapshot = self.editor.snapshot(coordinate)
        self.snapshots[coordinate] = snapshot
        if snapshot is None:
            return {"hex": str(coordinate), "world": None, "details": None}
        state = self.get_state()
        return {
            "hex": str(coordinate),
            "world": state["worlds"][str(coordinate)],
            "details": world_details(snapshot),
        }

    def get_map(self) -> dict:
        subsector = self.editor.subsector
        return {
            "title": map_title(subsector),
            "glyphs": [asdict(glyph) for glyph in map_glyphs(subsector)],
        }


class SessionManager:
    """Manages all active editing sessions.

    In-memory storage; sessions are lost on restart.
    """

    def __init__(self):
        self.sessions: dict[str, EditorSession] = {}

    def create_session(
        self,
        seed: int | None = None,
        abundance_dm: int = 0,
        grid: GridSize | None = None,
        name: str | None = None,
    ) -> EditorSession:
        """Generate a new subsector and open a session on it.

        Args:
            seed: Optional RNG seed for determinism
            abundance_dm: World-abundance DM
            grid: Grid dimensions (standard layout if omitted)
            name: Subsector name (generated if omitted)

        Returns:
            Newly created EditorSession
        """
        session_id = f"subsector-{uuid.uuid4().hex[:8]}"
        if seed is None:
            seed = uuid.uuid4().int % (2**32)

        editor = SubsectorEditor.from_seed(seed, abundance_dm, grid or GridSize(), name)

        session = EditorSession(id=session_id, seed=seed, editor=editor)
        self.sessions[session_id] = session

        logger.info(
            f"Created session {session_id}: {editor.subsector.name}, "
            f"seed={seed}, abundance DM={abundance_dm}"
        )
        return session

    def get(self, session_id: str) -> EditorSession | None:
        return self.sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        """Delete a session.

        Returns:
            True if deleted, False if not found
        """
        if session_id in self.sessions:
            del self.sessions[session_id]
            logger.info(f"Deleted session {session_id}")
            return True
        return False

    def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} sessions")
        self.sessions.clear()
