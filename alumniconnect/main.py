# alumniconnect/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import get_settings
from .database import create_db_and_tables, SessionLocal
from .routers import user_router, mentorship_router, conversation_router, message_router

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL.upper(), format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(
    title="AlumniConnect Mentorship API",
    description="Mentorship requests between students and alumni, with a conversation opened on acceptance.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(user_router.router)
app.include_router(mentorship_router.router)
app.include_router(conversation_router.router)
app.include_router(message_router.router)

@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Application startup event triggered.")
    create_db_and_tables()
    logger.info("Startup sequence completed successfully.")

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "reachable"}
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "database": "unreachable", "error": str(e)}
