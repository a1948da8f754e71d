"""
Meta Description AI Server Entry Point.

All application logic is organized in the `meta_description` package.
"""
from meta_description.main import app

if __name__ == "__main__":
    import uvicorn
    from meta_description.config import settings

    uvicorn.run(
        "server:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
