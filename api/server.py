"""
FastAPI server exposing the database as a REST API.
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from simpledb.config import get_settings
from simpledb.engine import DatabaseEngine
from simpledb.errors import ErrorKind, TableNotFound
from simpledb.logging import setup_logging


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1, description="SimpleDB command text")


class QueryResponse(BaseModel):
    status: str
    message: str
    type: Optional[str] = None
    columns: Optional[List[str]] = None
    rows: Optional[List[List[Any]]] = None
    text: Optional[str] = None


class TablesResponse(BaseModel):
    tables: List[str]
    count: int


def create_app(engine: Optional[DatabaseEngine] = None) -> FastAPI:
    """Build the API around one engine instance."""
    engine = engine or DatabaseEngine()
    app = FastAPI(title="SimpleDB API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "SimpleDB API",
            "version": "1.0.0",
            "endpoints": {
                "POST /query": "Execute a command",
                "GET /tables": "List all tables",
                "GET /tables/{name}": "Get table info"
            }
        }

    @app.get("/tables", response_model=TablesResponse)
    async def list_tables() -> TablesResponse:
        """List all tables in the database."""
        tables = engine.list_tables()
        return TablesResponse(tables=tables, count=len(tables))

    @app.get("/tables/{table_name}")
    async def get_table_info(table_name: str) -> Dict[str, Any]:
        """Get information about a specific table."""
        try:
            return engine.get_table_info(table_name)
        except TableNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))

    @app.post("/query", response_model=QueryResponse, response_model_exclude_none=True)
    async def execute_query(request: QueryRequest) -> QueryResponse:
        """Execute a raw command."""
        result = engine.execute(request.query)
        if not result.ok:
            status_code = 404 if result.error == ErrorKind.TABLE_NOT_FOUND else 400
            raise HTTPException(
                status_code=status_code,
                detail={"error": result.error.value, "message": result.message},
            )
        return QueryResponse(**result.to_dict())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    setup_logging(settings.observability.log_level, settings.observability.log_format)
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)
