"""Format detection for exchange CSV records.

A record's format is identified purely from its field names, joined in
source column order into a signature and looked up in a static table.
Fields added by the CSV reading layer (not present in the export) are
dropped before the signature is computed.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Optional

from ..trade import Exchange

SIGNATURE_DELIMITER = "|"

# pandas names blank header cells "Unnamed: <n>"
_PLACEHOLDER_HEADER = re.compile(r"^Unnamed: \d+$")


class FormatKind(Enum):
    BINANCE_TRADES = Exchange.BINANCE
    BITTREX_ORDERS = Exchange.BITTREX
    KRAKEN_LEDGER = Exchange.KRAKEN

    @property
    def exchange(self) -> Exchange:
        return self.value


SIGNATURES: dict[str, FormatKind] = {
    "Date(UTC)|Market|Type|Price|Amount|Total|Fee|Fee Coin": FormatKind.BINANCE_TRADES,
    "OrderUuid|Exchange|Type|Quantity|Limit|CommissionPaid|Price|Opened|Closed": FormatKind.BITTREX_ORDERS,
    "txid|refid|time|type|aclass|asset|amount|fee|balance": FormatKind.KRAKEN_LEDGER,
}


def is_injected_field(name: Any, extra: Iterable[str] = ()) -> bool:
    """True for fields the reader adds on its own.

    ``csv.DictReader`` stores overflow cells under a ``None`` key and pandas
    invents ``Unnamed: <n>`` headers for blank columns.
    """
    if name is None:
        return True
    if not isinstance(name, str):
        return False
    return bool(_PLACEHOLDER_HEADER.match(name)) or name in extra


def strip_injected_fields(
    record: Mapping[Any, Any], extra: Iterable[str] = ()
) -> dict[str, Any]:
    """Return a copy of the record without reader-injected fields."""
    extra = frozenset(extra)
    return {k: v for k, v in record.items() if not is_injected_field(k, extra)}


def compute_signature(field_names: Iterable[str]) -> str:
    return SIGNATURE_DELIMITER.join(field_names)


def detect(field_names: Iterable[str]) -> Optional[FormatKind]:
    """Map a record's field names to its format, or None if unknown."""
    return SIGNATURES.get(compute_signature(field_names))
