"""
Host Inventory Search - system profile enumeration API
Run with: uvicorn main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()  # Must be before importing config

from fastapi import FastAPI

from hostinv.config import Config
from hostinv.router import router as profile_router, configure_router
from hostinv.search import QueryRunner, create_client
from hostinv.system_profile import HostSystemProfile

cfg = Config()  # Fresh instance after dotenv loaded

logging.basicConfig(
    level=cfg.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Globals
_runner: QueryRunner = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _runner

    logger.info(f"Startup: hosts index {cfg.hosts_index}, max buckets {cfg.max_buckets}")

    client = create_client(cfg.opensearch_host, cfg.aws_region)
    _runner = QueryRunner(client, log_queries=cfg.log_queries)
    configure_router(HostSystemProfile(_runner, cfg))

    if not await _runner.ping():
        logger.warning(f"OpenSearch at {cfg.opensearch_host} is not reachable yet")

    yield

    # Shutdown
    await _runner.close()


app = FastAPI(title="Host Inventory Search", version="0.1.0", lifespan=lifespan)
app.include_router(profile_router)
