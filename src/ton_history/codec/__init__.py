"""
TL wire codec

Key components:
- reader.py: atomic, forward-only response reader plus value-and-rest helpers
- writer.py: request encoder
- schema.py: constructor ids of the history queries and their responses
"""

from .reader import (
    WireReader,
    read_uint32_le,
    read_length_prefixed_bytes,
    read_block_reference,
    skip_block_references,
)
from .writer import WireWriter
from . import schema

__all__ = [
    "WireReader",
    "WireWriter",
    "read_uint32_le",
    "read_length_prefixed_bytes",
    "read_block_reference",
    "skip_block_references",
    "schema",
]
