import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import build_environment
from app.routers import cron, health, projects
from app.domain.errors import NotFoundError
from app.runtime.context import with_environment


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


configure_logging()

app = FastAPI(
    title="Folio API",
    description="Portfolio of public GitHub projects with a KV-backed cache",
    version=settings.VERSION,
)

# Build the KV binding once; every request runs with it as the ambient environment
@app.on_event("startup")
async def startup_event():
    app.state.environment = build_environment()


@app.middleware("http")
async def environment_middleware(request: Request, call_next):
    env = getattr(request.app.state, "environment", None)
    return await with_environment(env, lambda: call_next(request))


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


# Domain error handlers
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(projects.router, tags=["Projects"])
app.include_router(cron.router, tags=["Cron"])

@app.get("/")
async def root():
    return {"message": "Welcome to the Folio API. See /docs for API documentation"}
