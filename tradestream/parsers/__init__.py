from .binance import normalize_binance
from .bittrex import normalize_bittrex, split_pair
from .format_detector import FormatKind, compute_signature, detect, strip_injected_fields
from .kraken import KrakenLedgerPairer, LedgerLeg, PairingAnomaly, PairingResult
from .values import parse_number, parse_text, parse_time
