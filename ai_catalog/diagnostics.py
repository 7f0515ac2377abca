"""Diagnostics for the catalog datasets, without starting the web server."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional

import click

from ai_catalog import config
from ai_catalog.models import Dataset
from ai_catalog.query import catalog_stats
from ai_catalog.query import get_categories
from ai_catalog.storage import LoadResult
from ai_catalog.storage import load_all

logger = logging.getLogger(__name__)


def summarize(results: dict[Dataset, LoadResult]) -> list[str]:
    lines = []
    for dataset in Dataset:
        result = results[dataset]
        if not result.ok:
            lines.append(f"{dataset.value}_error={result.error}")
            continue
        lines.append(f"{dataset.value}_records={len(result.records)}")
        lines.append(f"{dataset.value}_categories={len(get_categories(result.records))}")

    tools = results[Dataset.TOOLS]
    if tools.ok:
        stats = catalog_stats(tools.records)
        favourites = sum(1 for tool in tools.records if tool.is_favourite)
        lines.append(f"tools_free_or_freemium={stats.free_tools}")
        lines.append(f"tools_favourites={favourites}")
    return lines


@click.command()
@click.option("--data-dir", type=click.Path(path_type=Path), default=None, help="Directory holding the JSON files")
@click.option("--data-url", default=None, help="Base URL to fetch the JSON files from instead")
def main(data_dir: Optional[Path], data_url: Optional[str]) -> None:
    """Load the three datasets and print counts and timing."""
    data_dir = data_dir or config.DATA_DIR
    data_url = data_url if data_url is not None else config.DATA_URL

    t0 = time.perf_counter()
    results = asyncio.run(load_all(data_dir=data_dir, base_url=data_url or None))
    t1 = time.perf_counter()

    print(f"source={data_url or data_dir}")
    print(f"load_seconds={t1 - t0:.3f}")
    for line in summarize(results):
        print(line)


if __name__ == "__main__":
    main()
