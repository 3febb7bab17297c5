import argparse
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db, seed_sample_data
from config import load_config
from utils.logging_config import configure_logging
from routes import videos, overlays, analytics, notes, reports, settings  # Import routers

app = FastAPI(title="VidOverlay", description="Interactive timestamped overlays and quizzes for YouTube videos")

# Include routers
app.include_router(videos.router, prefix="/videos", tags=["videos"])
app.include_router(overlays.router, prefix="/overlays", tags=["overlays"])
app.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
app.include_router(notes.router, prefix="/notes", tags=["notes"])
app.include_router(reports.router, prefix="/reports", tags=["reports"])
app.include_router(settings.router, prefix="/settings", tags=["settings"])


@app.get("/health")
async def health_check():
    return {"status": "ok"}

# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: load config once, init logging and DB
    config = load_config()
    configure_logging(config.log_level)
    init_db(config.db_path)
    app.state.config = config
    yield

app.router.lifespan_context = lifespan  # For auto init on start

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="VidOverlay App")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--sample", action="store_true", help="Initialize and add the sample video with overlays")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    args = parser.parse_args()
    config = load_config()  # Ensures config is copied if missing
    logger = configure_logging(config.log_level)
    if args.init or args.sample:
        init_db(config.db_path)
        if args.sample:
            seed_sample_data(config.db_path)
        logger.info("DB initialized and config copied to %s", config.config_dir)
        sys.exit(0)
    # Run server
    uvicorn.run("main:app", host=config.host, port=config.port, reload=args.dev, log_level=config.log_level.lower())
