import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.cors import CORSMiddleware

from friends_api import config
from friends_api.api import friends

settings = config.get_settings()

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
log = logging.getLogger(__name__)


description = """
Friends API serves friend profiles with total and mutual friend counts
to authenticated users.
"""

tags_metadata = [
    {"name": "friends", "description": "Friend profiles and friend counts"},
]

app = FastAPI(
    title="Friends API",
    description=description,
    version="1.0.0",
    openapi_tags=tags_metadata,
)

# Configure CORS for local web clients
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def response_validation_handler(request: Request, exc: ValidationError):
    """Query results that fail the response model are server defects, not client errors."""
    log.exception("Response failed validation on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(friends.router)


@app.get("/")
def root():
    return {"message": "Friends API is running", "version": "1.0.0"}


@app.get("/health")
def health():
    return {"ok": True}
