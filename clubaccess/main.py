"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from clubaccess.config import settings, configure_logging
from clubaccess.database import connect_db, disconnect_db
from clubaccess.errors import ClubAccessError, DependencyUnavailable

logger = logging.getLogger(__name__)

# Seconds a client should wait before retrying after a 503
RETRY_AFTER_SECONDS = 5

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Club membership, invitations and department access control",
    version=settings.APP_VERSION,
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClubAccessError)
async def club_access_error_handler(request: Request, exc: ClubAccessError):
    """Render domain errors as {"detail": message}"""
    headers = None
    if isinstance(exc, DependencyUnavailable):
        headers = {"Retry-After": str(RETRY_AFTER_SECONDS)}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    configure_logging()
    await connect_db()
    logger.info("%s started in %s mode", settings.APP_NAME, settings.APP_ENV)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await disconnect_db()
    logger.info("%s stopped", settings.APP_NAME)


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


# Import and include routers
from clubaccess.routes import profiles, onboarding, clubs, invites, memberships, records

app.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
app.include_router(onboarding.router, prefix="/onboarding", tags=["Onboarding"])
app.include_router(clubs.router, prefix="/clubs", tags=["Clubs"])
app.include_router(records.router, prefix="/clubs", tags=["Player Records"])
app.include_router(invites.router, prefix="/invites", tags=["Invites"])
app.include_router(memberships.router, prefix="/memberships", tags=["Memberships"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clubaccess.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
