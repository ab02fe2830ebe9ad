import logging

import uvicorn

from app.config import settings
from app.init_db import init_database

if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("🚀 Starting Reserve.PH...")

    # Initialize database
    print("📊 Initializing database...")
    init_database()

    # Start the server
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level
    )
