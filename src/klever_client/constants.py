"""
Core constants for the Klever transaction library.
"""

# Native asset
KLV_ASSET_ID = "KLV"
KFI_ASSET_ID = "KFI"

# KLV and KFI use 6 decimals: 1 KLV = 1_000_000 smallest units
KLV_PRECISION = 6
KFI_PRECISION = 6

# Bech32 addresses: "klv1" + 32 raw bytes
ADDRESS_PREFIX = "klv"
ADDRESS_LENGTH = 32

# BLAKE2b output length for transaction hashes
HASH_LENGTH = 32

# Ed25519
SIGNATURE_LENGTH = 64
PRIVATE_KEY_LENGTH = 32

# google.protobuf.Any type URL prefix for contract parameters
ANY_TYPE_URL_PREFIX = "type.googleapis.com/proto."

# Fixed-width wire limits
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
UINT32_MAX = (1 << 32) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1
