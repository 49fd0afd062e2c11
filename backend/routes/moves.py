"""Move library endpoints."""

from fastapi import APIRouter, Depends

from garlic.moves import MoveLibrary

from .deps import get_moves

router = APIRouter()


@router.get("/moves")
async def list_moves(library: MoveLibrary = Depends(get_moves)):
    """List all scanned moves."""
    return library.list()


@router.get("/moves/groups")
async def list_move_groups(library: MoveLibrary = Depends(get_moves)):
    """List move groups, sorted."""
    return library.groups()
