"""Portal layout schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class GridItem(BaseModel):
    """A widget rectangle on the portal grid.

    Geometry is deliberately unconstrained here: transient drag and resize
    deltas may be negative or out of range and are normalized by the engine.
    """

    id: str
    key: str = ""  # Widget kind, opaque to the engine
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 1
    props: Dict[str, Any] = Field(default_factory=dict)


class Layout(BaseModel):
    """A stored portal layout."""

    id: str
    tenant_id: str
    user_id: str
    name: str = "default"
    cols: int = 12
    row_height: int = 90
    gap: int = 8
    widgets: List[GridItem] = Field(default_factory=list)


class SaveLayoutRequest(BaseModel):
    """Request to save a layout."""

    cols: Optional[int] = None
    row_height: Optional[int] = None
    gap: Optional[int] = None
    widgets: List[GridItem]


class MoveRequest(BaseModel):
    x: int
    y: int


class ResizeRequest(BaseModel):
    w: int
    h: int


class NudgeRequest(BaseModel):
    """Relative keyboard-style edit, one cell per unit."""

    dx: int = 0
    dy: int = 0
    dw: int = 0
    dh: int = 0


class LayoutResponse(BaseModel):
    """Response for layout operations."""

    status: str
    message: str
    layout: Optional[Layout] = None
