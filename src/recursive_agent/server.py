"""
FastAPI server streaming recursive runs as server-sent events.

POST /api/agent with {"task": ..., "maxDepth": ...} returns a text/event-stream
where every event carries the full tree: ``data: {"tree": {...}}``.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from .config.engine_config import EngineConfig
from .engine.orchestrator import RecursiveOrchestrator
from .models.work_unit_models import RunRequest
from .streaming.sse import sse_event_stream

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[EngineConfig] = None,
    orchestrator: Optional[RecursiveOrchestrator] = None,
) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        config: Engine configuration (defaults if None)
        orchestrator: Orchestrator shared by requests (built from config if None)

    Returns:
        FastAPI app
    """
    config = config or EngineConfig()
    orchestrator = orchestrator or RecursiveOrchestrator(config=config)

    app = FastAPI(
        title="Recursive Agent",
        description="Recursive task decomposition with live tree streaming",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/agent")
    async def run_agent(request: RunRequest):
        """Execute a task and stream tree snapshots as they happen."""
        if request.max_depth > config.max_depth_limit:
            raise HTTPException(
                status_code=422,
                detail=f"maxDepth must be <= {config.max_depth_limit}",
            )

        logger.info(f"Streaming run for '{request.task[:50]}' (max_depth: {request.max_depth})")

        return StreamingResponse(
            sse_event_stream(orchestrator, request.task, request.max_depth),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
            },
        )

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now().isoformat()}

    return app


def serve(config: EngineConfig) -> None:
    """Run the app under uvicorn."""
    import uvicorn

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
