"""
Baraka – Backend API
Start with: uvicorn main:app --reload
"""
import asyncio
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlmodel import Session

import config
import db
from logging_handler import setup_logger
from routers import auth, dashboard, study, tasks, timer as timer_routes, worship
from storage import CorruptValueError
from timer import TimerRegistry, run_ticker

logger = setup_logger(__name__)


def create_app(
    engine: Optional[Engine] = None,
    start_ticker: bool = True,
    tick_interval: float = 1.0,
) -> FastAPI:
    bind = engine if engine is not None else db.engine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.init_db(bind)
        registry = TimerRegistry(
            session_factory=lambda: Session(bind),
            focus_seconds=config.FOCUS_MINUTES * 60,
            break_seconds=config.BREAK_MINUTES * 60,
        )
        app.state.timers = registry
        ticker = asyncio.create_task(run_ticker(registry, tick_interval)) if start_ticker else None
        app.state.ticker = ticker
        try:
            yield
        finally:
            if ticker is not None:
                ticker.cancel()
                with suppress(asyncio.CancelledError):
                    await ticker

    app = FastAPI(
        title="Baraka API",
        description="Dashboard, pomodoro timer and study tracker",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.engine = bind

    # Allow the frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CorruptValueError)
    async def corrupt_value_handler(request: Request, exc: CorruptValueError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.get("/health")
    def health():
        """Check that the API is running. Frontend can call this first."""
        return {"status": "ok", "message": "Baraka API is running"}

    @app.get("/")
    def root():
        """Root welcome."""
        return {"app": "Baraka", "docs": "/docs"}

    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(study.router)
    app.include_router(tasks.router)
    app.include_router(timer_routes.router)
    app.include_router(worship.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
