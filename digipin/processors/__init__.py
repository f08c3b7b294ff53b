"""Dataset-level processors built on the grid codec."""

from .batch_encoder import encode_array, encode_frame, decode_frame

__all__ = ['encode_array', 'encode_frame', 'decode_frame']
