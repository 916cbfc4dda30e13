"""Routes for reading and editing portal layouts."""

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from loguru import logger

from portalgrid.core.dependencies import get_service
from portalgrid.core.errors import ServiceError
from portalgrid.core.services import LayoutService
from portalgrid.schemas.portal import (
    GridItem,
    Layout,
    LayoutResponse,
    MoveRequest,
    NudgeRequest,
    ResizeRequest,
    SaveLayoutRequest,
)

router = APIRouter()

DEFAULT_TENANT = "demo-tenant"
DEFAULT_USER = "demo-user"


class Owner:
    """Tenant, user and layout name addressed by a request."""

    def __init__(
        self,
        x_tenant_id: str = Header(DEFAULT_TENANT),
        x_user_id: str = Header(DEFAULT_USER),
        name: str = Query("default"),
    ):
        self.tenant_id = x_tenant_id
        self.user_id = x_user_id
        self.name = name

    def __str__(self) -> str:
        return f"{self.tenant_id}/{self.user_id}/{self.name}"


def _service_failure(action: str, owner: Owner, error: Exception) -> HTTPException:
    if isinstance(error, ServiceError):
        logger.warning(f"Failed to {action} for {owner}: {error.message}")
        return HTTPException(status_code=error.status_code, detail=error.message)

    logger.error(f"Failed to {action} for {owner}: {str(error)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(error)}",
    )


@router.get("/layout", response_model=LayoutResponse)
async def get_layout(
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    """
    Retrieve a layout, creating an empty default one on first access.
    """
    try:
        layout = await layout_service.get_layout(
            owner.tenant_id, owner.user_id, owner.name
        )
        logger.info(f"Retrieved layout {owner} with {len(layout.widgets)} widgets")
        return LayoutResponse(
            status="success",
            message="Layout retrieved successfully",
            layout=layout,
        )
    except Exception as e:
        raise _service_failure("retrieve layout", owner, e)


@router.post("/layout", response_model=LayoutResponse)
async def save_layout(
    request: SaveLayoutRequest,
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    """
    Save a complete layout. Grid settings not sent keep their stored values.
    """
    try:
        current = await layout_service.get_layout(
            owner.tenant_id, owner.user_id, owner.name
        )
        updates = request.model_dump(exclude_none=True, exclude={"widgets"})
        layout = Layout(
            **{**current.model_dump(), **updates, "widgets": request.widgets}
        )
        saved = await layout_service.save_layout(layout)
        return LayoutResponse(
            status="success",
            message="Layout saved successfully",
            layout=saved,
        )
    except Exception as e:
        raise _service_failure("save layout", owner, e)


@router.delete("/layout", response_model=LayoutResponse)
async def delete_layout(
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    """
    Delete a stored layout.
    """
    try:
        deleted = await layout_service.delete_layout(
            owner.tenant_id, owner.user_id, owner.name
        )
        if deleted:
            return LayoutResponse(
                status="success", message="Layout deleted successfully"
            )
        return LayoutResponse(status="success", message="No layout found to delete")
    except Exception as e:
        raise _service_failure("delete layout", owner, e)


@router.post("/layout/widgets", response_model=LayoutResponse)
async def add_widget(
    widget: GridItem,
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    try:
        layout = await layout_service.add_widget(
            owner.tenant_id, owner.user_id, owner.name, widget
        )
        return LayoutResponse(
            status="success", message="Widget added successfully", layout=layout
        )
    except Exception as e:
        raise _service_failure("add widget", owner, e)


@router.delete("/layout/widgets/{widget_id}", response_model=LayoutResponse)
async def remove_widget(
    widget_id: str,
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    try:
        layout = await layout_service.remove_widget(
            owner.tenant_id, owner.user_id, owner.name, widget_id
        )
        return LayoutResponse(
            status="success", message="Widget removed successfully", layout=layout
        )
    except Exception as e:
        raise _service_failure("remove widget", owner, e)


@router.post("/layout/widgets/{widget_id}/move", response_model=LayoutResponse)
async def move_widget(
    widget_id: str,
    request: MoveRequest,
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    """
    Move a widget to a grid cell and return the resolved layout.
    """
    try:
        layout = await layout_service.move_widget(
            owner.tenant_id, owner.user_id, owner.name, widget_id, request.x, request.y
        )
        return LayoutResponse(
            status="success", message="Widget moved successfully", layout=layout
        )
    except Exception as e:
        raise _service_failure("move widget", owner, e)


@router.post("/layout/widgets/{widget_id}/resize", response_model=LayoutResponse)
async def resize_widget(
    widget_id: str,
    request: ResizeRequest,
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    """
    Resize a widget and return the resolved layout.
    """
    try:
        layout = await layout_service.resize_widget(
            owner.tenant_id, owner.user_id, owner.name, widget_id, request.w, request.h
        )
        return LayoutResponse(
            status="success", message="Widget resized successfully", layout=layout
        )
    except Exception as e:
        raise _service_failure("resize widget", owner, e)


@router.post("/layout/widgets/{widget_id}/nudge", response_model=LayoutResponse)
async def nudge_widget(
    widget_id: str,
    request: NudgeRequest,
    owner: Owner = Depends(),
    layout_service: LayoutService = Depends(get_service(LayoutService)),
):
    try:
        layout = await layout_service.nudge_widget(
            owner.tenant_id,
            owner.user_id,
            owner.name,
            widget_id,
            **request.model_dump(),
        )
        return LayoutResponse(
            status="success", message="Widget nudged successfully", layout=layout
        )
    except Exception as e:
        raise _service_failure("nudge widget", owner, e)
