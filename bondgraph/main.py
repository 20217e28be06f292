from fastapi import FastAPI
from bondgraph.routers import level_routers
from bondgraph.core.config import settings
from bondgraph.core.database import Base, engine
from bondgraph.utils.logger_config import configure_logging
from bondgraph import models  # noqa: F401  registers tables on Base

# logging first, so table creation is logged too
configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

# Create database tables
Base.metadata.create_all(bind=engine)

# create FastAPI
app = FastAPI(title="Bondgraph Puzzle API", version="1.0")

# get routers
app.include_router(level_routers.router, prefix="/levels", tags=["Levels"])


@app.get("/")
async def index():
    return {"name": app.title, "levels": "/levels/"}
