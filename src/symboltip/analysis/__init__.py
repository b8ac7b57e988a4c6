"""Per-kind analyzers - pure functions from symbols to fragments."""

from symboltip.analysis.numeric import NumericForm, canonical_bytes, decompose, round_trip
from symboltip.analysis.signature import SignatureKey, match_signature, same_signature
from symboltip.analysis.types import EnumRange, enum_range

__all__ = [
    "EnumRange",
    "NumericForm",
    "SignatureKey",
    "canonical_bytes",
    "decompose",
    "enum_range",
    "match_signature",
    "round_trip",
    "same_signature",
]
