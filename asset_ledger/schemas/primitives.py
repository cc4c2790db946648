from __future__ import annotations

from typing import Annotated

from pydantic import Field

from asset_ledger.core.types import (
    ASSET_ID_MAX_LEN,
    INTEGRITY_HASH_MAX_LEN,
    MAX_PRECISION,
    MAX_QUANTITY,
    PRINCIPAL_MAX_LEN,
    URI_MAX_LEN,
)


# --- Bounded identifiers (rejected here, before an operation runs) ---
AssetId = Annotated[str, Field(min_length=1, max_length=ASSET_ID_MAX_LEN)]
IntegrityHash = Annotated[str, Field(min_length=1, max_length=INTEGRITY_HASH_MAX_LEN)]
Uri = Annotated[str, Field(max_length=URI_MAX_LEN)]
PrincipalId = Annotated[str, Field(min_length=1, max_length=PRINCIPAL_MAX_LEN)]

# --- Numeric primitives ---
# Ranges are advertised in the schema but not validated here: out-of-range
# values reach the ledger and are rejected there with INVALID_AMOUNT or
# BAD_INPUT, keeping its error codes observable.
Quantity = Annotated[int, Field(json_schema_extra={"maximum": MAX_QUANTITY})]
Precision = Annotated[int, Field(json_schema_extra={"minimum": 0, "maximum": MAX_PRECISION})]
NonNegInt = Annotated[int, Field(ge=0)]
