"""Company directory used for name-based ticker inference."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

import pandas as pd


class DirectoryLoadError(Exception):
    pass


@dataclass(frozen=True)
class CompanyRecord:
    symbol: str
    name: str


@dataclass(frozen=True)
class Directory:
    """Read-only, ordered collection of companies.

    Row order is a priority: when several companies match a phrase, the
    earliest one wins.
    """

    records: Tuple[CompanyRecord, ...] = ()

    def __iter__(self) -> Iterator[CompanyRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def find(self, symbol: str) -> Optional[CompanyRecord]:
        """Return the first record with this symbol, if any."""
        for record in self.records:
            if record.symbol == symbol:
                return record
        return None


def _clean(value) -> str:
    # Short CSV rows come back as NaN
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def load_directory(rows: Iterable[Tuple[Optional[str], Optional[str]]]) -> Directory:
    """
    Build a directory from already-parsed (symbol, name) pairs.

    Args:
        rows: Pairs in source order; missing values may be None or blank

    Returns:
        Directory without the rows lacking a symbol or a name
    """
    records = []
    for symbol, name in rows:
        symbol, name = _clean(symbol), _clean(name)
        if symbol and name:
            records.append(CompanyRecord(symbol=symbol, name=name))
    return Directory(records=tuple(records))


def load_directory_from_csv(path: str) -> Directory:
    """
    Load a NASDAQ screener export (symbol,name,... with a header row).

    Only the first two columns are used, by position.

    Args:
        path: CSV file path

    Returns:
        Directory in file row order
    """
    if not os.path.exists(path):
        raise DirectoryLoadError(f"Company list not found at {path}")

    try:
        width = len(pd.read_csv(path, nrows=0).columns)
        # Rows with extra fields (unquoted commas in names) keep their leading fields
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            engine="python",
            on_bad_lines=lambda fields: fields[:width],
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DirectoryLoadError(f"Could not parse company list {path}: {e}") from e

    if df.shape[1] < 2:
        raise DirectoryLoadError(f"Company list {path} needs symbol and name columns")

    return load_directory(zip(df.iloc[:, 0], df.iloc[:, 1]))
