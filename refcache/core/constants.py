"""Core constants: cache key structure and scaffold field names.

Single source of truth for the stored payload shape (DRY). Used by the
working copy, the population engine and the cache key builders.
"""

# Delimiter for composite cache keys (prefix:owner_namespace)
CACHE_KEY_SEP = ":"

# Default outer key prefix; overridable via Settings.cache_key_prefix
CACHE_PREFIX_REFERENCE = "reference"

# Scaffold record stored under each definition namespace
SCAFFOLD_ENTITIES = "entities"
SCAFFOLD_CONDITION_HASH = "condition_hash"

# Condition kind used when a definition carries a conditions map
DEFAULT_CONDITION_KIND = "where"
