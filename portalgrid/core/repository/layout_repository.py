"""Repository for managing portal layouts."""

import asyncio
import uuid
from typing import Dict, Optional, Tuple

from loguru import logger

from ...schemas.portal import Layout
from ..config import get_server_settings

LayoutKey = Tuple[str, str, str]


class InMemoryLayoutRepository:
    """Layout store keyed by tenant, user and layout name.

    Layouts are copied on the way in and out so callers never hold a
    reference to stored state.
    """

    def __init__(
        self,
        default_cols: Optional[int] = None,
        default_row_height: Optional[int] = None,
        default_gap: Optional[int] = None,
    ):
        settings = get_server_settings()
        self.default_cols = default_cols or settings.default_cols
        self.default_row_height = default_row_height or settings.default_row_height
        self.default_gap = settings.default_gap if default_gap is None else default_gap
        self._store: Dict[LayoutKey, Layout] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _key(tenant_id: str, user_id: str, name: str) -> LayoutKey:
        return (tenant_id, user_id, name)

    async def get_layout(self, tenant_id: str, user_id: str, name: str) -> Layout:
        """Get a layout, creating an empty default one if none is stored."""
        key = self._key(tenant_id, user_id, name)
        async with self._lock:
            layout = self._store.get(key)
            if layout is None:
                layout = Layout(
                    id=uuid.uuid4().hex,
                    tenant_id=tenant_id,
                    user_id=user_id,
                    name=name,
                    cols=self.default_cols,
                    row_height=self.default_row_height,
                    gap=self.default_gap,
                )
                self._store[key] = layout
                logger.debug(f"Created default layout {layout.id} for {key}")
            return layout.model_copy(deep=True)

    async def save_layout(self, layout: Layout) -> Layout:
        """Create or replace a layout.

        Args:
            layout: Layout to store

        Returns:
            A copy of the stored layout
        """
        key = self._key(layout.tenant_id, layout.user_id, layout.name)
        async with self._lock:
            self._store[key] = layout.model_copy(deep=True)
            return layout.model_copy(deep=True)

    async def delete_layout(self, tenant_id: str, user_id: str, name: str) -> bool:
        """Delete a layout.

        Returns:
            True if a layout was stored under the key, False otherwise
        """
        key = self._key(tenant_id, user_id, name)
        async with self._lock:
            return self._store.pop(key, None) is not None
