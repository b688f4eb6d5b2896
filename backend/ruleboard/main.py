import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from ruleboard import __version__
from ruleboard.api.routes import router
from ruleboard.config import CORS_ORIGINS, DATA_DIR, LOG_LEVEL
from ruleboard.db.models import Base
from ruleboard.db.session import engine

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Rules Analytics Dashboard",
    version=__version__,
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)


@app.on_event("startup")
def startup():
    DATA_DIR.mkdir(parents=True, exist_ok=True)

    retries = 5
    delay = 2

    for attempt in range(retries):
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Chat log database connected")
            return
        except OperationalError:
            logger.info("Waiting for database... (%d/%d)", attempt + 1, retries)
            time.sleep(delay)

    # Chat turns still work, they are just not recorded
    logger.warning("Database not ready, running without chat log persistence")
