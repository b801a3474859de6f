"""PR Review Action - FastAPI webhook entry point."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.config import settings
from src.core.exceptions import ReviewPipelineError
from src.core.logging import get_logger
from src.core.schemas.responses import ErrorResponse, HealthResponse
from src.services.github.routes import router as github_router

logger = get_logger("main")

app = FastAPI(
    title="PR Review Action",
    description="LLM-powered GitHub pull request reviewer",
    version="0.1.0",
)


@app.exception_handler(ReviewPipelineError)
async def pipeline_exception_handler(request: Request, exc: ReviewPipelineError) -> JSONResponse:
    """Report pipeline errors as a structured 400 response."""
    logger.warning(f"Pipeline error: {exc.message}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=exc.message,
            details=exc.details if exc.details else None,
        ).model_dump(),
    )

# Include routes
app.include_router(github_router, prefix="/api")


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting PR Review Action webhook on {settings.host}:{settings.port}")
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
