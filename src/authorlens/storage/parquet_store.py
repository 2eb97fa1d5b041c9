"""Parquet persistence for the people registry.

One row per person.  The identity provider that issued the ``external_id``
values is stored once, as file-level metadata under the ``provider`` key.
"""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq
import structlog

from authorlens.errors import DataAccessError, SchemaError
from authorlens.identity.models import Commit, NameWithRepo, Person
from authorlens.identity.people import People

logger = structlog.get_logger(__name__)

PROVIDER_METADATA_KEY = b"provider"

PEOPLE_SCHEMA = pa.schema(
    [
        pa.field("id", pa.int64(), nullable=False),
        pa.field(
            "names",
            pa.list_(pa.struct([("name", pa.string()), ("repo", pa.string())])),
            nullable=False,
        ),
        pa.field("emails", pa.list_(pa.string()), nullable=False),
        pa.field("external_id", pa.string()),
        pa.field("sample_commit", pa.struct([("hash", pa.string()), ("repo", pa.string())])),
    ]
)


def _person_to_row(person: Person) -> dict:
    return {
        "id": person.id,
        "names": [{"name": n.name, "repo": n.repo} for n in person.names_with_repos],
        "emails": list(person.emails),
        "external_id": person.external_id or None,
        "sample_commit": (
            {"hash": person.sample_commit.hash, "repo": person.sample_commit.repo}
            if person.sample_commit is not None
            else None
        ),
    }


def _row_to_person(row: dict) -> Person:
    commit = row["sample_commit"]
    return Person(
        id=row["id"],
        names_with_repos=[NameWithRepo(n["name"], n["repo"]) for n in row["names"]],
        emails=list(row["emails"]),
        sample_commit=Commit(commit["hash"], commit["repo"]) if commit is not None else None,
        external_id=row["external_id"] or "",
    )


def write_people_parquet(people: People, path: Path, provider: str = "") -> None:
    """Write *people* to a Parquet file, recording *provider* in the file metadata."""
    path = Path(path)
    rows = [_person_to_row(people[person_id]) for person_id in people]
    table = pa.Table.from_pylist(rows, schema=PEOPLE_SCHEMA)
    table = table.replace_schema_metadata({PROVIDER_METADATA_KEY: provider.encode("utf-8")})
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        pq.write_table(table, path)
    except OSError as exc:
        msg = f"Cannot write people to {path}: {exc}"
        raise DataAccessError(msg) from exc
    logger.info("people_written", path=str(path), people=len(rows), provider=provider)


def _types_match(actual: pa.DataType, expected: pa.DataType) -> bool:
    # List child field names differ between writers ("item" vs "element").
    if pa.types.is_list(expected):
        return (
            pa.types.is_list(actual) or pa.types.is_large_list(actual)
        ) and _types_match(actual.value_type, expected.value_type)
    if pa.types.is_struct(expected):
        if not pa.types.is_struct(actual) or actual.num_fields != expected.num_fields:
            return False
        return all(
            actual.field(i).name == expected.field(i).name
            and _types_match(actual.field(i).type, expected.field(i).type)
            for i in range(expected.num_fields)
        )
    if pa.types.is_string(expected):
        return pa.types.is_string(actual) or pa.types.is_large_string(actual)
    return actual.equals(expected)


def _check_schema(schema: pa.Schema, path: Path) -> None:
    for expected in PEOPLE_SCHEMA:
        idx = schema.get_field_index(expected.name)
        if idx < 0:
            msg = f"{path}: missing column {expected.name!r}"
            raise SchemaError(msg)
        actual = schema.field(idx).type
        if not _types_match(actual, expected.type):
            msg = f"{path}: column {expected.name!r} has type {actual}, expected {expected.type}"
            raise SchemaError(msg)


def read_people_parquet(path: Path) -> tuple[People, str]:
    """Read a registry written by :func:`write_people_parquet`.

    Returns
    -------
    tuple[People, str]
        The registry and the external ID provider label (``""`` if none).

    Raises
    ------
    SchemaError
        The file lacks a column or a column has an unexpected type.
    DataAccessError
        The file cannot be read.
    """
    path = Path(path)
    try:
        table = pq.read_table(path)
    except (OSError, pa.ArrowInvalid) as exc:
        msg = f"Cannot read people from {path}: {exc}"
        raise DataAccessError(msg) from exc

    _check_schema(table.schema, path)
    metadata = table.schema.metadata or {}
    provider = metadata.get(PROVIDER_METADATA_KEY, b"").decode("utf-8")

    try:
        people = People(_row_to_person(row) for row in table.to_pylist())
    except ValueError as exc:
        msg = f"{path}: {exc}"
        raise SchemaError(msg) from exc
    logger.info("people_read", path=str(path), people=len(people), provider=provider)
    return people, provider
