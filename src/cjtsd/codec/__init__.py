"""
cjtsd.codec — encoder, decoder and runtime settings.

Public API
- CjtsdBuilder, create, encode (cjtsd.codec.builder)
- expand, expand_raw (cjtsd.codec.expand)
- CodecSettings (cjtsd.codec.config)

Import DAG discipline
- Depends on stdlib and cjtsd.core only.
"""

from .builder import CjtsdBuilder, create, encode
from .config import CodecSettings
from .expand import expand, expand_raw

__all__ = [
    "CjtsdBuilder",
    "CodecSettings",
    "create",
    "encode",
    "expand",
    "expand_raw",
]
