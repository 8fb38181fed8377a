from jobscope.resolver.models import (
    NoJsonFound,
    ParseError,
    StructuredRecord,
    UnrepairableJson,
)
from jobscope.resolver.repair import repair_json
from jobscope.resolver.resolver import StructuredResponseResolver, locate_json

__all__ = [
    "NoJsonFound",
    "ParseError",
    "StructuredRecord",
    "StructuredResponseResolver",
    "UnrepairableJson",
    "locate_json",
    "repair_json",
]
