#!/usr/bin/env python3
"""
Start script - runs the proxy under uvicorn on HOST:PORT from settings
"""

if __name__ == "__main__":
    import uvicorn

    from core.config import settings

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
