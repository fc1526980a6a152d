"""
MongoDB access helpers.

`db` is None when DATABASE_URL / DATABASE_NAME are not configured; handlers
check for that before touching a collection.
"""

import logging
import os
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from bson import ObjectId
from fastapi import HTTPException
from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

import config  # noqa: F401  (loads .env before the variables below are read)

logger = logging.getLogger(__name__)

CONNECT_ATTEMPTS = 5
CONNECT_DELAY_SECONDS = 3


def connect_with_retry(url: str, attempts: int = CONNECT_ATTEMPTS, delay: float = CONNECT_DELAY_SECONDS) -> MongoClient:
    for attempt in range(1, attempts + 1):
        try:
            client = MongoClient(url, serverSelectionTimeoutMS=5000, socketTimeoutMS=45000)
            client.server_info()
            logger.info("Connected to MongoDB")
            return client
        except PyMongoError as e:
            logger.error(f"MongoDB connection attempt {attempt} failed: {e}")
            if attempt < attempts:
                time.sleep(delay)
    logger.error(f"Failed to connect to MongoDB after {attempts} attempts")
    sys.exit(1)


def ensure_indexes(database) -> None:
    database["tourist"].create_index([("email", ASCENDING)], unique=True)
    database["provider"].create_index([("email", ASCENDING)], unique=True)
    database["admin"].create_index([("username", ASCENDING)], unique=True)


_client = None
db = None

database_url = os.getenv("DATABASE_URL")
database_name = os.getenv("DATABASE_NAME")

if database_url and database_name:
    _client = connect_with_retry(database_url)
    db = _client[database_name]
    ensure_indexes(db)


def get_collection_name(model_cls) -> str:
    return model_cls.__name__.lower()


def to_object_id(id_str: str, entity: str) -> ObjectId:
    if not id_str or not ObjectId.is_valid(id_str):
        logger.warning(f"Invalid {entity} ID: {id_str}")
        raise HTTPException(status_code=400, detail=f"Invalid {entity} ID")
    return ObjectId(id_str)


def _require_db():
    if db is None:
        raise RuntimeError("Database not available. Check DATABASE_URL and DATABASE_NAME environment variables.")
    return db


def create_document(collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a single document, stamping created_at/updated_at, and return its id."""
    database = _require_db()
    if isinstance(data, BaseModel):
        data_dict = data.model_dump()
    else:
        data_dict = data.copy()
    now = datetime.now(timezone.utc)
    data_dict["created_at"] = now
    data_dict["updated_at"] = now
    result = database[collection_name].insert_one(data_dict)
    return str(result.inserted_id)


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
    sort: Optional[List[Tuple[str, int]]] = None,
) -> List[Dict[str, Any]]:
    database = _require_db()
    cursor = database[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)
