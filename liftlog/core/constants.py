"""Application constants."""

# Persisted document
SCHEMA_VERSION = 1
DEFAULT_STORE_FILENAME = "workout_store.json"

# Soft input caps used by the set picker (not enforced by the store)
WEIGHT_DISPLAY_MAX = 250.0
REPS_DISPLAY_MAX = 30

# Writer shutdown
WRITER_FLUSH_TIMEOUT_SECONDS = 5.0
