"""HTTP API for Magno."""

import logging

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, load_settings
from .errors import InvalidQuery
from .service import AggregationService

logger = logging.getLogger(__name__)

FAILED_SOURCES_HEADER = "X-Magno-Failed-Sources"


def create_app(
    service: AggregationService | None = None, settings: Settings | None = None
) -> FastAPI:
    """Build the FastAPI app around an aggregation service."""
    if service is None:
        service = AggregationService.from_settings(settings or load_settings())

    app = FastAPI(title="Magno", docs_url="/docs")
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=[FAILED_SOURCES_HEADER],
    )

    @app.get("/search")
    async def search(response: Response, q: str | None = Query(None)) -> list[dict]:
        try:
            report = await service.handle_with_report(q)
        except InvalidQuery as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        if report.failed_sources:
            response.headers[FAILED_SOURCES_HEADER] = ",".join(report.failed_sources)
        return [r.to_dict() for r in report.results]

    @app.get("/sources")
    async def sources() -> list[str]:
        return service.source_names

    return app


def serve(settings: Settings, host: str | None = None, port: int | None = None) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    logger.info("Serving Magno on http://%s:%d", host, port)
    uvicorn.run(create_app(settings=settings), host=host, port=port)
