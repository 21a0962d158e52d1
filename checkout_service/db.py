"""
db.py — Document store connection

Opens the MongoDB client and registers the Beanie documents.
"""

import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from .config import Settings
from .documents import Order, Payment

DOCUMENT_MODELS = [Payment, Order]

log = logging.getLogger(__name__)


async def init_database(settings: Settings) -> AsyncIOMotorClient:
    """
    Connects to MongoDB and initializes the Beanie document models.

    Returns:
        AsyncIOMotorClient: The client, to be closed on shutdown.
    """
    client = AsyncIOMotorClient(settings.mongodb_uri)
    await init_beanie(database=client[settings.mongodb_db], document_models=DOCUMENT_MODELS)
    log.info(f"Connected to MongoDB database '{settings.mongodb_db}'.")
    return client
