"""Loading and saving catalog collections as JSON documents."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Optional
from typing import Sequence

import httpx

from ai_catalog.models import CatalogRecord
from ai_catalog.models import CollectionFormatError
from ai_catalog.models import Dataset
from ai_catalog.models import parse_collection

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of loading one dataset; `error` is set when the load failed."""

    dataset: Dataset
    records: list[CatalogRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def decode_collection(dataset: Dataset, raw: bytes | str) -> list[CatalogRecord]:
    """Decode JSON text into validated records."""
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CollectionFormatError(f"not valid JSON: {e}") from e
    return parse_collection(dataset, payload)


def encode_collection(records: Sequence[CatalogRecord]) -> str:
    """Serialize records as an indented JSON array."""
    return json.dumps([record.to_json() for record in records], indent=2, ensure_ascii=False) + "\n"


def write_collection(path: Path, records: Sequence[CatalogRecord]) -> None:
    """Write a collection to disk, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode_collection(records), encoding="utf-8")
    logger.info(f"Saved {len(records)} records to {path}")


async def _read_local(dataset: Dataset, data_dir: Path) -> bytes:
    path = data_dir / dataset.filename
    if not path.exists():
        raise FileNotFoundError(f"Data file not found at {path}")
    return await asyncio.to_thread(path.read_bytes)


async def _fetch_remote(dataset: Dataset, base_url: str, client: httpx.AsyncClient) -> bytes:
    response = await client.get(f"{base_url}/{dataset.filename}")
    response.raise_for_status()
    return response.content


async def load_dataset(
    dataset: Dataset,
    data_dir: Optional[Path] = None,
    base_url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> LoadResult:
    """Load one dataset, turning any failure into an error on the result."""
    try:
        if base_url:
            if client is None:
                raise ValueError("an HTTP client is required to fetch remote datasets")
            raw = await _fetch_remote(dataset, base_url, client)
        else:
            if data_dir is None:
                raise ValueError("a data directory is required to read local datasets")
            raw = await _read_local(dataset, data_dir)
        records = decode_collection(dataset, raw)
    except (OSError, httpx.HTTPError, CollectionFormatError) as e:
        logger.error(f"Error loading {dataset.value} data: {e}")
        message = f"Error loading {dataset.label.lower()}. Please try refreshing the page."
        return LoadResult(dataset=dataset, error=message)

    logger.info(f"Loaded {len(records):,} {dataset.value} records")
    return LoadResult(dataset=dataset, records=records)


async def load_all(
    data_dir: Optional[Path] = None,
    base_url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> dict[Dataset, LoadResult]:
    """Load the three datasets concurrently; one failing does not affect the others."""
    if base_url and client is None:
        async with httpx.AsyncClient() as owned_client:
            return await load_all(data_dir=data_dir, base_url=base_url, client=owned_client)

    results = await asyncio.gather(
        *(load_dataset(dataset, data_dir=data_dir, base_url=base_url, client=client) for dataset in Dataset)
    )
    return {result.dataset: result for result in results}
