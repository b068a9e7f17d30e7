"""Main FastAPI application entry point."""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi.responses import Response

from theme_renderer.config import get_settings
from theme_renderer.core.app_factory import create_app
from theme_renderer.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
setup_logging(get_settings().log_level)

app = create_app()


@app.get("/favicon.ico")
async def favicon():
    """Return empty favicon to prevent 404 errors."""
    return Response(content=b"", media_type="image/x-icon")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "theme_renderer.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
