"""Defaults shared by the CLI, the HTTP service and the query layer."""

# Dataset location used when none is given
DEFAULT_DATASET = "./pools.json"

# Number of paths listed by default (0 = unlimited, which implies union mode)
DEFAULT_K = 1

# Maximum number of hops explored by default
DEFAULT_MAX_DEPTH = 5

# Parameters that identify a pool instance, in priority order.
# The first truthy one becomes the identity part of the pool-node id;
# without any of them the whole parameter set is serialized instead.
IDENTITY_KEYS = ("targetAddress", "pool", "vault", "lpToken", "router")

# Query results a PathFinder keeps per cache before evicting the oldest
DEFAULT_CACHE_SIZE = 1024
