"""Shared fixtures for the Cellar Market scraper test suite."""

from __future__ import annotations

import sys
from collections import defaultdict
from pathlib import Path

import pytest

# Ensure the scraper modules are importable from tests/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from models import ProductRecord
from store import StoreError, StoreResult


class FakeStore:
    """In-memory stand-in for ``CatalogStore`` with injectable failures.

    ``reject`` holds zero-based indexes of ``products`` inserts to refuse;
    ``fail_tables`` refuses every insert into the named tables;
    ``raise_on_select`` makes every read raise ``StoreError``.
    """

    def __init__(self, *, reject=(), fail_tables=(), raise_on_select=False):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.reject = set(reject)
        self.fail_tables = set(fail_tables)
        self.raise_on_select = raise_on_select
        self.insert_calls: dict[str, int] = defaultdict(int)

    def insert(self, table, row):
        n = self.insert_calls[table]
        self.insert_calls[table] += 1
        if table in self.fail_tables or (table == "products" and n in self.reject):
            return StoreResult(ok=False, error=f"insert #{n} into {table} rejected")
        self.tables[table].append(dict(row))
        return StoreResult(ok=True, data=[dict(row)])

    def select(self, table, columns="*", *, filters=None, limit=None):
        if self.raise_on_select:
            raise StoreError(f"select from {table} failed: connection refused")
        rows = [
            r for r in self.tables[table]
            if all(r.get(k) == v for k, v in (filters or {}).items())
        ]
        if columns != "*":
            cols = [c.strip() for c in columns.split(",")]
            rows = [{c: r.get(c) for c in cols} for r in rows]
        return rows[:limit] if limit is not None else rows

    def count(self, table):
        if self.raise_on_select:
            raise StoreError(f"count on {table} failed: connection refused")
        return len(self.tables[table])

    def delete(self, table, *, filters=None, any_of=None, everything=False):
        if not (filters or any_of or everything):
            raise ValueError("delete() needs filters, any_of, or everything=True")

        def matches(row):
            if everything:
                return True
            if filters and not all(row.get(k) == v for k, v in filters.items()):
                return False
            if any_of:
                return any(_condition_holds(row, cond) for cond in any_of)
            return True

        deleted = [r for r in self.tables[table] if matches(r)]
        self.tables[table] = [r for r in self.tables[table] if not matches(r)]
        return StoreResult(ok=True, data=deleted)


def _condition_holds(row, condition):
    """Evaluate a PostgREST ``col.op.value`` condition (eq / ilike only)."""
    column, op, value = condition.split(".", 2)
    actual = row.get(column)
    if op == "eq":
        return actual == value
    if op == "ilike":
        return value.strip("*").lower() in (actual or "").lower()
    raise ValueError(f"unsupported operator: {op}")


@pytest.fixture
def fake_store():
    """Fresh empty in-memory store per test."""
    return FakeStore()


@pytest.fixture
def make_record():
    """Factory that builds valid ``ProductRecord`` objects.

    Any keyword argument overrides the default.
    """

    def _make(
        *,
        name="Opus One 2018",
        producer="Opus One",
        type="wine",
        varietal="Cabernet Sauvignon Blend",
        region="Napa Valley, California",
        base_price=400.0,
        current_price=None,
        vintage=2018,
        **overrides,
    ):
        return ProductRecord(
            name=name,
            producer=producer,
            type=type,
            varietal=varietal,
            region=region,
            base_price=base_price,
            current_price=base_price if current_price is None else current_price,
            vintage=vintage,
            **overrides,
        )

    return _make
