"""Wire codec for in-band control messages."""

from .measurement import decode_measurement, encode_measurement

__all__ = ["decode_measurement", "encode_measurement"]
