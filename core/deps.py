"""
Define functions/aliases for dependency injection
"""
from collections.abc import Generator
from functools import lru_cache
from typing import Annotated, TypeAlias
from sqlmodel import Session
from fastapi import Depends

from core.config import get_settings
from core.db import get_engine
from core.storage import BlobStore, build_blob_store


# Define db dependency
def get_db() -> Generator[Session, None, None]:
    with Session(get_engine()) as session:
        yield session


@lru_cache
def get_blob_store() -> BlobStore:
    """Blob store shared by every request, built once per process"""
    return build_blob_store(get_settings())


SessionDep: TypeAlias = Annotated[Session, Depends(get_db)]
BlobStoreDep: TypeAlias = Annotated[BlobStore, Depends(get_blob_store)]
