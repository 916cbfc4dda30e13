"""Service for editing portal layouts."""

from typing import Callable, List

from loguru import logger

from ...schemas.portal import GridItem, Layout
from ..errors import (
    ConflictError,
    InvalidConfigurationError,
    NotFoundError,
    ValidationError,
)
from ..grid import engine
from ..registry import register_service
from ..repository import InMemoryLayoutRepository
from .base import BaseService


@register_service
class LayoutService(BaseService):
    """Applies grid engine operations to stored layouts."""

    def __init__(self, repo: InMemoryLayoutRepository):
        super().__init__(repo)

    @classmethod
    def from_repository(cls, repo: InMemoryLayoutRepository) -> "LayoutService":
        return cls(repo)

    async def get_layout(self, tenant_id: str, user_id: str, name: str) -> Layout:
        return await self.repo.get_layout(tenant_id, user_id, name)

    async def save_layout(self, layout: Layout) -> Layout:
        """Validate and store a complete layout as sent by the client.

        Raises:
            InvalidConfigurationError: If the layout has no columns
            ValidationError: If row height, gap or widget ids are invalid
        """
        if layout.cols < 1:
            raise InvalidConfigurationError(
                f"Grid needs at least one column, got cols={layout.cols}"
            )
        if layout.row_height < 1:
            raise ValidationError(f"row_height must be positive: {layout.row_height}")
        if layout.gap < 0:
            raise ValidationError(f"gap cannot be negative: {layout.gap}")

        seen = set()
        for widget in layout.widgets:
            if widget.id in seen:
                raise ValidationError(f"Duplicate widget id: {widget.id}")
            seen.add(widget.id)

        saved = await self.repo.save_layout(layout)
        logger.info(
            f"Saved layout '{layout.name}' for {layout.tenant_id}/{layout.user_id} "
            f"with {len(layout.widgets)} widgets"
        )
        return saved

    async def delete_layout(self, tenant_id: str, user_id: str, name: str) -> bool:
        deleted = await self.repo.delete_layout(tenant_id, user_id, name)
        if deleted:
            logger.info(f"Deleted layout '{name}' for {tenant_id}/{user_id}")
        return deleted

    async def _apply(
        self,
        tenant_id: str,
        user_id: str,
        name: str,
        operation: Callable[[Layout], List[GridItem]],
    ) -> Layout:
        layout = await self.repo.get_layout(tenant_id, user_id, name)
        layout.widgets = operation(layout)
        return await self.repo.save_layout(layout)

    async def move_widget(
        self, tenant_id: str, user_id: str, name: str, widget_id: str, x: int, y: int
    ) -> Layout:
        layout = await self._apply(
            tenant_id,
            user_id,
            name,
            lambda current: engine.move(
                current.widgets, widget_id, x, y, current.cols
            ),
        )
        logger.info(f"Moved widget {widget_id} in layout '{name}' to ({x}, {y})")
        return layout

    async def resize_widget(
        self, tenant_id: str, user_id: str, name: str, widget_id: str, w: int, h: int
    ) -> Layout:
        layout = await self._apply(
            tenant_id,
            user_id,
            name,
            lambda current: engine.resize(
                current.widgets, widget_id, w, h, current.cols
            ),
        )
        logger.info(f"Resized widget {widget_id} in layout '{name}' to {w}x{h}")
        return layout

    async def nudge_widget(
        self,
        tenant_id: str,
        user_id: str,
        name: str,
        widget_id: str,
        dx: int = 0,
        dy: int = 0,
        dw: int = 0,
        dh: int = 0,
    ) -> Layout:
        layout = await self._apply(
            tenant_id,
            user_id,
            name,
            lambda current: engine.nudge(
                current.widgets, widget_id, current.cols, dx=dx, dy=dy, dw=dw, dh=dh
            ),
        )
        logger.info(
            f"Nudged widget {widget_id} in layout '{name}' by "
            f"move=({dx}, {dy}) size=({dw}, {dh})"
        )
        return layout

    async def add_widget(
        self, tenant_id: str, user_id: str, name: str, widget: GridItem
    ) -> Layout:
        """Add a widget below the current content and settle it into place.

        Width is clamped to the layout columns, as a resize would.

        Raises:
            ConflictError: If a widget with the same id already exists
        """
        layout = await self.repo.get_layout(tenant_id, user_id, name)
        if any(existing.id == widget.id for existing in layout.widgets):
            raise ConflictError(f"Widget already exists: {widget.id}")

        bottom = max((item.y + item.h for item in layout.widgets), default=0)
        placed = widget.model_copy(
            update={
                "y": bottom,
                "w": max(1, min(layout.cols, widget.w)),
                "h": max(1, widget.h),
            }
        )
        layout.widgets = engine.resolve(
            [*layout.widgets, placed], widget.id, layout.cols
        )
        saved = await self.repo.save_layout(layout)
        logger.info(f"Added widget {widget.id} ({widget.key}) to layout '{name}'")
        return saved

    async def remove_widget(
        self, tenant_id: str, user_id: str, name: str, widget_id: str
    ) -> Layout:
        """Remove a widget and compact what remains.

        Raises:
            NotFoundError: If the widget is not in the layout
        """
        layout = await self.repo.get_layout(tenant_id, user_id, name)
        remaining = [item for item in layout.widgets if item.id != widget_id]
        if len(remaining) == len(layout.widgets):
            raise NotFoundError("Widget", widget_id)

        layout.widgets = engine.compact(remaining, layout.cols)
        saved = await self.repo.save_layout(layout)
        logger.info(f"Removed widget {widget_id} from layout '{name}'")
        return saved

    async def health_check(self) -> bool:
        """Check if the service is healthy."""
        try:
            engine.resolve([GridItem(id="probe")], "probe", cols=1)
            return True
        except Exception as e:
            logger.error(f"Layout service health check failed: {e}")
            return False
