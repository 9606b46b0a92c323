"""
Configuration constants for the accelerator benchmark.

This module contains all configuration parameters including:
- Origin and accelerator endpoints and credentials
- Workload parameters (key counts, object lengths, list iterations)
- Client settings (timeouts, pool size)
- Content encoding constants used for gzip detection
"""

import os

# =============================================================================
# OBJECT STORE CONFIGURATION
# =============================================================================

# Default bucket used when a request does not name one
BUCKET_NAME: str = os.getenv("BUCKET_NAME", "")

# Origin object store (the authoritative copy)
ORIGIN_ENDPOINT: str = os.getenv("ORIGIN_ENDPOINT", "")
ORIGIN_ACCESS_KEY_ID: str = os.getenv("ORIGIN_ACCESS_KEY_ID", os.getenv("AWS_ACCESS_KEY_ID", ""))
ORIGIN_SECRET_ACCESS_KEY: str = os.getenv(
    "ORIGIN_SECRET_ACCESS_KEY", os.getenv("AWS_SECRET_ACCESS_KEY", "")
)
ORIGIN_REGION: str = os.getenv("ORIGIN_REGION", os.getenv("AWS_REGION", "us-east-1"))

# Caching accelerator placed in front of the origin
ACCELERATOR_ENDPOINT: str = os.getenv("ACCELERATOR_ENDPOINT", "")
ACCELERATOR_ACCESS_KEY_ID: str = os.getenv("ACCELERATOR_ACCESS_KEY_ID", ORIGIN_ACCESS_KEY_ID)
ACCELERATOR_SECRET_ACCESS_KEY: str = os.getenv(
    "ACCELERATOR_SECRET_ACCESS_KEY", ORIGIN_SECRET_ACCESS_KEY
)
ACCELERATOR_REGION: str = os.getenv("ACCELERATOR_REGION", ORIGIN_REGION)

# =============================================================================
# WORKLOAD PARAMETERS
# =============================================================================

MAX_KEYS: int = 1000  # Hard cap on keys per run
DEFAULT_NUM_KEYS: int = 1000
DEFAULT_OBJECT_LENGTH: int = 100  # Bytes per generated put payload

LIST_ITERATIONS: int = 10
LIST_MAX_KEYS: int = 1000

READ_CHUNK_SIZE: int = 4096  # Body drain chunk size for full-object gets

# Synthetic keys are PERF_KEY_PREFIX followed by an index
PERF_KEY_PREFIX: str = "accel-bench-perf"

# Characters used for generated payloads
PAYLOAD_ALPHABET: str = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "abcdefghijklmnopqrstuvwxyz"
)

# =============================================================================
# STATISTICS
# =============================================================================

# Nearest-rank positions: sorted[int(n * fraction)]
P50_FRACTION: float = 0.5
P90_FRACTION: float = 0.9

# =============================================================================
# CONTENT ENCODING
# =============================================================================

GZIP_ENCODING: str = "gzip"
GZIP_SUFFIX: str = ".gz"

# =============================================================================
# CLIENT SETTINGS
# =============================================================================

CONNECT_TIMEOUT_SECONDS: int = 5
READ_TIMEOUT_SECONDS: int = 60
MAX_POOL_CONNECTIONS: int = 10

# Every call is issued exactly once; retries would skew latency samples
MAX_ATTEMPTS: int = 1

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = "%(asctime)s - %(levelname)s - %(message)s"
