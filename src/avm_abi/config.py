"""ABI codec configuration constants.

Keep this file aligned with the ARC-4 wire conventions used by the generated
contract clients (fixed-width big-endian scalars, u16 headers and offsets).
"""

# Scalar widths (bytes)
UINT64_SIZE = 8
UINT256_SIZE = 32
BYTE_SIZE = 1
BOOL_SIZE = 1
ADDRESS_SIZE = 32

# Dynamic framing
LENGTH_HEADER_SIZE = 2  # u16 length/count header of dynamic sequences
OFFSET_SIZE = 2  # u16 head slot of a dynamic record field
MAX_UINT16 = 0xFFFF

# Integer bounds
MAX_UINT64 = 2**64 - 1
MAX_UINT256 = 2**256 - 1
MAX_BYTE = 0xFF

# Return-value envelope
RETURN_MARKER = bytes([0x15, 0x1F, 0x7C, 0x75])
RETURN_MARKER_SIZE = len(RETURN_MARKER)

# Method calls
SELECTOR_SIZE = 4
MAX_APP_ARGS = 16  # selector + 15 argument blobs
MAX_DIRECT_ARGS = 14  # arguments kept as separate blobs when packing a tail tuple

# Address strings
ADDRESS_CHECKSUM_SIZE = 4
ADDRESS_STRING_LENGTH = 58
