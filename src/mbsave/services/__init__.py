"""Service layer exports."""

from .export import dump_json, select_section, to_payload
from .save_decoder import DecodeOptions, SaveDecoder, decode_save

__all__ = [
    "DecodeOptions",
    "SaveDecoder",
    "decode_save",
    "dump_json",
    "select_section",
    "to_payload",
]
