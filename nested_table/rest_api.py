"""
rest_api.py - REST surface for the nested table

Exposes the rendered tree, row toggling and the session load state.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from nested_table.config import get_config
from nested_table.controller import NestedTableController
from nested_table.errors import ControllerStateError

logger = logging.getLogger(__name__)


# Pydantic models for API requests/responses
class ToggleRequest(BaseModel):
    """Pydantic model for a row toggle"""
    id: Any
    level: int = Field(0, ge=0)
    wait: bool = False


class APIResponse(BaseModel):
    """Base API response model"""
    status: str
    data: Optional[Any] = None
    metadata: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class NestedTableAPI:
    """REST API around a single NestedTableController session"""

    def __init__(self, controller: NestedTableController, load_on_startup: bool = True):
        self.controller = controller
        self.load_on_startup = load_on_startup
        self.app = FastAPI(title="Nested Table API", lifespan=self._lifespan)
        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        if self.load_on_startup:
            await self.controller.load()
        try:
            yield
        finally:
            await self.controller.aclose()

    def _setup_routes(self):
        """Setup all API routes"""

        @self.app.get("/health")
        async def health_check():
            return {"status": "healthy", "service": "nested-table", "version": "1.0"}

        @self.app.get("/table")
        async def table_endpoint():
            view = self.controller.view()
            return APIResponse(
                status="success",
                data=view.to_dict(),
                metadata={"max_depth": self.controller.max_depth}
            )

        @self.app.post("/table/toggle")
        async def toggle_endpoint(request: ToggleRequest):
            try:
                result = self.controller.toggle(request.id, request.level)
            except ControllerStateError as e:
                raise HTTPException(status_code=409, detail=str(e))
            except (TypeError, ValueError) as e:
                raise HTTPException(status_code=422, detail=str(e))

            if request.wait:
                await self.controller.wait_for_fetches()

            return APIResponse(
                status="success",
                data={"key": result.key.to_token(), "expanded": result.expanded},
                metadata={"pending_fetches": self.controller.coordinator.pending}
            )

        @self.app.post("/table/retry")
        async def retry_endpoint():
            try:
                await self.controller.retry()
            except ControllerStateError as e:
                raise HTTPException(status_code=409, detail=str(e))

            view = self.controller.view()
            return APIResponse(status="success", data=view.to_dict())

        @self.app.get("/table/failures")
        async def failures_endpoint():
            failures = [
                {"key": key.to_token(), "id": key.id, "level": key.level, "error": str(err.cause)}
                for key, err in self.controller.coordinator.failures.items()
            ]
            return APIResponse(status="success", data=failures)

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app


def create_api(controller: Optional[NestedTableController] = None) -> NestedTableAPI:
    """Create the API, building the controller from the global config when none is given"""
    if controller is None:
        controller = NestedTableController.from_config(get_config())
    return NestedTableAPI(controller)
