from fastapi import FastAPI
from routers.race_router import router as race_router
from fastapi.middleware.cors import CORSMiddleware
from config.logging_config import configure_logging
from config.settings import get_settings
from database.db_config import get_engine, init_db
from contextlib import asynccontextmanager

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    # Startup: the relational marker backend needs its table
    if settings.marker_backend == "sql":
        init_db(get_engine(settings.database_url, settings.db_echo))
    yield

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(race_router)
