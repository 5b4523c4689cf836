"""
Mock character API mirroring the public Rick and Morty REST endpoints.
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from shared.logging import get_logger
from shared.test_helpers import TestDataFactory


class MockCharacterApiServer:
    """Mock character API server implementation.

    Serves ``/api/character`` (paginated list and ``?name=`` filter) and
    ``/api/character/{ids}`` with the same not-found bodies the real API
    returns. ``request_count`` lets callers assert how often the upstream was
    actually hit.
    """

    def __init__(self, port: int = 8090, characters: Optional[List[Dict[str, Any]]] = None):
        self.port = port
        self.logger = get_logger("mock.character_api")
        self.app = FastAPI(title="Mock Character API", version="1.0.0")
        self.characters = characters if characters is not None else TestDataFactory.create_test_characters()
        self.request_count = 0

        self._setup_routes()

    def _setup_routes(self):
        """Set up mock character API routes."""

        @self.app.middleware("http")
        async def count_requests(request, call_next):
            self.request_count += 1
            return await call_next(request)

        @self.app.get("/api/character")
        @self.app.get("/api/character/")
        async def list_characters(name: Optional[str] = Query(None)):
            """List characters, optionally filtered by a case-insensitive name fragment."""
            results = self.characters
            if name is not None:
                needle = name.lower()
                results = [c for c in self.characters if needle in c["name"].lower()]
                if not results:
                    return JSONResponse(status_code=404, content={"error": "There is nothing here"})

            return {
                "info": {"count": len(results), "pages": 1, "next": None, "prev": None},
                "results": results,
            }

        @self.app.get("/api/character/{ids}")
        async def get_characters(ids: str):
            """Fetch a single character, or several when ids are comma separated."""
            wanted = [part.strip() for part in ids.split(",") if part.strip()]
            if not all(part.isdigit() for part in wanted):
                return JSONResponse(status_code=500, content={"error": "Hey! you must provide an id"})

            by_id = {str(c["id"]): c for c in self.characters}
            if len(wanted) > 1:
                return [by_id[part] for part in wanted if part in by_id]

            character = by_id.get(wanted[0]) if wanted else None
            if character is None:
                return JSONResponse(status_code=404, content={"error": "Character not found"})
            return character


def create_app():
    """Create mock character API application."""
    server = MockCharacterApiServer()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8090)
