# alumniconnect/__main__.py
import uvicorn

from .config import get_settings

def main():
    """Serve the API with uvicorn (``python -m alumniconnect`` or the ``alumniconnect`` script)."""
    settings = get_settings()
    uvicorn.run(
        "alumniconnect.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )

if __name__ == "__main__":
    main()
