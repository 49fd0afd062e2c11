"""Session CRUD endpoints.

Sessions are read and written in their authored form (audio file names
relative to the session's audio folder). GET /sessions/{id}/assembled returns
the playable form with resolved paths and library moves.
"""

from fastapi import APIRouter, Depends, HTTPException

from garlic.errors import IdentifierNotAllowed, InvalidIdentifier, MissingAsset, NotFound
from garlic.sessions import Session, SessionLibrary

from .deps import get_sessions

router = APIRouter()


@router.get("/sessions")
async def list_sessions(library: SessionLibrary = Depends(get_sessions)):
    """List all sessions in their authored form."""
    return library.store.list()


@router.post("/sessions", status_code=201)
async def create_session(body: Session, library: SessionLibrary = Depends(get_sessions)):
    """Create a session. IDs are assigned by the server."""
    try:
        return library.create(body)
    except IdentifierNotAllowed as e:
        raise HTTPException(422, str(e))
    except MissingAsset as e:
        raise HTTPException(422, str(e))


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, library: SessionLibrary = Depends(get_sessions)):
    """Get a single session by ID."""
    try:
        return library.store.get(session_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Session not found")


@router.get("/sessions/{session_id}/assembled")
async def get_assembled_session(session_id: str, library: SessionLibrary = Depends(get_sessions)):
    """Get a session as it is played: resolved audio paths, library moves."""
    try:
        return library.get(session_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Session not found")


@router.put("/sessions/{session_id}")
async def update_session(
    session_id: str, body: Session, library: SessionLibrary = Depends(get_sessions)
):
    """Replace a session. Missing item and action IDs are filled in."""
    try:
        existing = library.store.get(session_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Session not found")
    body.id = existing.id
    try:
        return library.update(body)
    except MissingAsset as e:
        raise HTTPException(422, str(e))


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str, library: SessionLibrary = Depends(get_sessions)):
    """Delete a session."""
    try:
        library.delete(session_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Session not found")
    except MissingAsset as e:
        raise HTTPException(422, str(e))
    return {"ok": True}
