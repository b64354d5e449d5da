"""
FastAPI standalone server for development
Runs the API with auto-reload; `dayflow start` is the packaged entry point
"""

from dayflow.app import create_app
from dayflow.core.logger import get_logger

logger = get_logger(__name__)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting DayFlow API server...")
    logger.info("API documentation available at: http://localhost:8000/docs")

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
