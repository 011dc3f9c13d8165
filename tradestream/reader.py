"""CSV reading: exchange exports -> ordered string records."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, Union

import pandas as pd

logger = logging.getLogger(__name__)

Source = Union[str, Path, io.StringIO]


def _read_chunks(source: Source, chunk_size: int) -> Iterator[pd.DataFrame]:
    # Keep every cell as the raw string; the normalizers own number parsing
    return pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8-sig",
        chunksize=chunk_size,
    )


def read_records(path: str | Path, chunk_size: int = 1000) -> Iterator[dict[str, Any]]:
    """Yield one record per CSV row, columns in file order."""
    path = Path(path)
    logger.info("Reading %s", path.name)
    try:
        chunks = _read_chunks(path, chunk_size)
    except pd.errors.EmptyDataError:
        logger.warning("%s is empty, skipping", path.name)
        return

    with chunks as reader:
        for chunk in reader:
            yield from chunk.to_dict(orient="records")


def read_records_from_text(text: str, chunk_size: int = 1000) -> Iterator[dict[str, Any]]:
    """Same as read_records, for CSV content already in memory."""
    if not text.strip():
        return
    with _read_chunks(io.StringIO(text), chunk_size) as reader:
        for chunk in reader:
            yield from chunk.to_dict(orient="records")


def iter_records(paths: Iterable[str | Path], chunk_size: int = 1000) -> Iterator[dict[str, Any]]:
    """Chain several exports into one record sequence."""
    for path in paths:
        yield from read_records(path, chunk_size)
