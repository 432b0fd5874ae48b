"""
Generation API entrypoint for deployment.

Serves:
- /health/live: Liveness probe
- /generate: Prompt in, generated text (or error string) out

Can be run as a module:
  python -m api.app
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional, Union

from fastapi import FastAPI
from pydantic import BaseModel, Field

from textgen import GenerationRequest, RequestResponseEngine

logger = logging.getLogger(__name__)

APP_NAME = "AI Generate Text API"
APP_VERSION = "0.1.0"


class GenerateBody(BaseModel):
    """Request body for /generate. Empty fields fall back to configured defaults."""

    prompt: Optional[str] = Field(default=None, description="User prompt")
    endpoint: str = Field(default="", description="Chat-completion endpoint URL")
    model: str = Field(default="", description="Model name")
    credential_ref: str = Field(default="", description="Named secret holding the API key")
    overrides: Union[str, Dict[str, Any], None] = Field(
        default=None, description="JSON object merged into the request payload"
    )
    dry_run: bool = Field(default=False, description="Return the request instead of sending it")

    def to_request(self) -> GenerationRequest:
        overrides = self.overrides
        if isinstance(overrides, dict):
            overrides = json.dumps(overrides)
        return GenerationRequest(
            prompt=self.prompt,
            endpoint=self.endpoint,
            model=self.model,
            credential_ref=self.credential_ref,
            overrides=overrides or "",
            dry_run=self.dry_run,
        )


class GenerateResult(BaseModel):
    kind: str
    output: str


def create_app(engine: Optional[RequestResponseEngine] = None) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        engine: Engine to serve; the process bootstrap engine by default
    """
    if engine is None:
        from infra import bootstrap_generation
        engine = bootstrap_generation().get_engine()

    app = FastAPI(
        title=APP_NAME,
        description="Prompt to chat-completion text",
        version=APP_VERSION,
    )

    @app.get("/health/live")
    async def live():
        """Liveness probe."""
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "endpoints": ["/health/live", "/generate"],
        }

    # Sync handler: the engine blocks on the outbound POST, FastAPI runs it
    # in the threadpool
    @app.post("/generate", response_model=GenerateResult)
    def generate(body: GenerateBody):
        """Run one generation. Error outcomes are returned with kind="error"."""
        outcome = engine.generate(body.to_request())
        if outcome.is_error:
            logger.info(f"Generation returned error outcome: {outcome.value}")
        return GenerateResult(kind=outcome.kind, output=outcome.value)

    return app


def main(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run generation API server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        import uvicorn
    except ImportError:
        print("Uvicorn not available. Install with: pip install uvicorn", file=sys.stderr)
        sys.exit(1)

    app = create_app()
    print(f"Starting {APP_NAME} on {host}:{port}")
    print(f"Health check: http://{host}:{port}/health/live")

    uvicorn.run(
        app,
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=APP_NAME)
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable hot reload")

    args = parser.parse_args()
    main(host=args.host, port=args.port, reload=args.reload)
