"""
DIGIPIN grid codes.

Encodes a latitude/longitude inside the DIGIPIN root region into a
10-symbol hierarchical grid code and decodes codes back to their cell.
The codec in ``digipin.grid_systems`` is pure; the HTTP service, CLI and
batch tools live in their own subpackages.
"""

__version__ = "1.0.0"
__description__ = "DIGIPIN geocode encoder/decoder with HTTP service and CLI"

# Note: the HTTP and batch layers are not imported here so that using the
# codec does not pull in FastAPI or pandas.
from .grid_systems import (
    encode, decode, try_encode, try_decode,
    DigipinError, CoordinateOutOfRangeError,
    InvalidCodeLengthError, InvalidCodeSymbolError, ErrorKind
)

__all__ = [
    '__version__',
    '__description__',
    'encode',
    'decode',
    'try_encode',
    'try_decode',
    'DigipinError',
    'CoordinateOutOfRangeError',
    'InvalidCodeLengthError',
    'InvalidCodeSymbolError',
    'ErrorKind'
]
