"""FastAPI application and main entry point for G-Pal."""

from contextlib import asynccontextmanager
from typing import Any, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from gpal.core.assistant import CalendarAssistant
from gpal.core.config import Settings
from gpal.core.logging import configure_logging

logger = structlog.get_logger(__name__)


def create_app(
    assistant: Optional[CalendarAssistant] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        assistant: Pre-built assistant (tests inject one); built from
            settings at startup when omitted.
        settings: Configuration; loaded from the environment when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or Settings.from_env()
    state: dict[str, Any] = {"assistant": assistant}

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if state["assistant"] is None:
            configure_logging(settings.system.log_level, settings.system.log_format)
            if not settings.is_configured:
                logger.warning("OpenAI API key not configured; chat requests will fail")
            state["assistant"] = CalendarAssistant.from_settings(settings)
            state["owned"] = True
        logger.info(
            "application_startup_complete",
            system=settings.system.system_name,
            environment=settings.system.environment,
        )
        yield
        if state.get("owned"):
            await state["assistant"].close()
        logger.info("application_shutdown_complete")

    app = FastAPI(
        title=settings.system.system_name,
        description="Natural-language Google Calendar assistant",
        version="0.1.0",
        debug=settings.system.debug,
        lifespan=lifespan,
    )

    @app.post("/chat")
    async def chat_endpoint(payload: dict[str, Any]) -> JSONResponse:
        """Turn a chat message into a calendar action.

        Args:
            payload: {"message": "..."}

        Returns:
            {"reply": "...", "command": {...} | null, "event": {...} | null}
        """
        message = str(payload.get("message") or "").strip()
        if not message:
            raise HTTPException(status_code=400, detail="message is required")

        reply = await state["assistant"].handle(message)
        status_code = 500 if reply.command is None else 200
        return JSONResponse(status_code=status_code, content=reply.model_dump(mode="json"))

    @app.get("/auth/status")
    async def auth_status() -> dict[str, bool]:
        """Report whether a calendar credential is held."""
        return {"connected": state["assistant"].is_connected()}

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "calendar_connected": state["assistant"].is_connected()}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gpal.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=3000,
        reload=False,
    )
