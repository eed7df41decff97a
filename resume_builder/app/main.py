import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_builder.app.api.routes.resume import router as resume_router
from resume_builder.app.api.routes.user import router as user_router

log = logging.getLogger(__name__)

API_TITLE = "Resume Builder API"


def health_check() -> dict[str, str]:
    """Liveness check; touches neither the database nor the editor sessions."""
    return {"status": "ok"}


def create_app() -> FastAPI:
    """Build the API application.

    Returns:
        FastAPI: The app serving the user and resume routers and `/health`.

    Notes:
        1. CORS is open while the browser client is served from another origin.
        2. Editor sessions live in process memory, so the app must run as a single worker.

    """
    _msg = "create_app starting"
    log.debug(_msg)

    app = FastAPI(title=API_TITLE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # TODO: read allowed origins from Settings before deploying
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in (user_router, resume_router):
        app.include_router(router)
    app.add_api_route("/health", health_check, methods=["GET"], tags=["health"])

    _msg = "create_app returning"
    log.debug(_msg)
    return app


app = create_app()
