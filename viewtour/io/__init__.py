"""
Instance decoding, solution encoding and synthetic instances.

This module provides:
    - JSON instance decoder with strict rejection of malformed input
    - JSON solution encoder
    - Synthetic instance generators
"""

from viewtour.io.decoder import parse_instance, read_instance, load_instance
from viewtour.io.encoder import (
    encode_solution,
    encode_result,
    dump_document,
    save_document,
)
from viewtour.io.synthetic import generate_square_instance, generate_random_instance

__all__ = [
    "parse_instance",
    "read_instance",
    "load_instance",
    "encode_solution",
    "encode_result",
    "dump_document",
    "save_document",
    "generate_square_instance",
    "generate_random_instance",
]
