from fastapi import FastAPI, HTTPException

from .config import ChunkingServiceConfig
from .exceptions import ConfigurationError
from .models import (
    ChunkCsvRequest,
    ChunkCsvResponse,
    ChunkingResult,
    ChunkResponse,
    ChunkTextRequest,
    ValidateRequest,
    ValidationReport,
)
from .service import ChunkingService


def _to_response(result: ChunkingResult) -> ChunkResponse:
    return ChunkResponse(
        document_id=result.document_id,
        source=result.source,
        total_chunks=result.total_chunks,
        chunks=result.chunks,
    )


def create_app(
    config: ChunkingServiceConfig | None = None,
    service: ChunkingService | None = None,
) -> FastAPI:
    service = service or ChunkingService(config or ChunkingServiceConfig.from_env())
    app = FastAPI(
        title="Chunking Service",
        version="1.0.0",
        description="Sentence-aware character- and token-budget chunking.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/chunk/text", response_model=ChunkResponse)
    def chunk_text(request: ChunkTextRequest) -> ChunkResponse:
        try:
            result = service.chunk_text(
                request.text,
                request.source,
                strategy=request.strategy,
                chunk_size=request.chunk_size,
                overlap=request.overlap,
                max_tokens=request.max_tokens,
                document_id=request.document_id,
            )
        except ConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return _to_response(result)

    @app.post("/chunk/csv", response_model=ChunkCsvResponse)
    def chunk_csv(request: ChunkCsvRequest) -> ChunkCsvResponse:
        try:
            results = service.chunk_csv(request.csv)
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return ChunkCsvResponse(
            total_records=len(results),
            documents=[_to_response(r) for r in results],
        )

    @app.post("/validate", response_model=ValidationReport)
    def validate(request: ValidateRequest) -> ValidationReport:
        return service.validate(request.chunks, request.max_tokens)

    return app


app = create_app()
