"""Arrow schema for persisted turn logs."""

from __future__ import annotations

import pyarrow as pa

TURN_LOG_SCHEMA_VERSION = 1

TURN_LOG_SCHEMA = pa.schema(
    [
        ("maze_id", pa.string()),
        ("turn", pa.int64()),
        ("entity_id", pa.int64()),
        ("kind", pa.string()),
        ("col", pa.int64()),
        ("row", pa.int64()),
        ("alive", pa.bool_()),
        ("outcome", pa.string()),
    ],
    metadata={b"schema_version": str(TURN_LOG_SCHEMA_VERSION).encode()},
)
