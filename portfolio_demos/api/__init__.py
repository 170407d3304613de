"""
Portfolio Demos API Application Factory
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging
from .banking import router as banking_router
from .bot import router as bot_router, simulate as bot_simulate


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    config = get_config()
    setup_logging(level=config.log_level, log_format=config.log_format)

    app = FastAPI(
        title="Portfolio Demos API",
        description="Interactive banking simulator and chat-bot simulator",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(banking_router, prefix="/banking", tags=["Banking"])
    app.include_router(bot_router, prefix="/bot", tags=["Bot"])
    app.add_api_route("/api/bot-simulate", bot_simulate,
                      methods=["POST"], tags=["Bot"])

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "portfolio_demos_api",
            "version": __version__
        }

    # Root endpoint
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Portfolio Demos API",
            "version": __version__,
            "description": "Interactive banking simulator and chat-bot simulator",
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "banking": "/banking",
                "bot": "/bot/simulate",
            }
        }

    return app


# Create the app instance for uvicorn
app = create_app()


def run_server(host: str = "0.0.0.0", port: int = 8090, debug: bool = False):
    """Run the FastAPI server"""
    uvicorn.run(
        "portfolio_demos.api:app",
        host=host,
        port=port,
        reload=debug,
        log_level="info"
    )
