"""Test helpers module for shared test utilities.

- constants: Token labels and pool-node ids of the JSON fixture
- factories: Dataset and graph factory functions
"""

from tests.helpers.constants import (
    CURVE_3POOL_ID,
    DAI,
    ETHENA_MINT_ID,
    FIXTURE_TOKENS,
    SUSDE,
    UNIV3_DAI_USDC_ID,
    UNIV3_USDC_WETH_ID,
    USDC,
    USDE,
    USDT,
    WETH,
)
from tests.helpers.factories import (
    POOL_A,
    POOL_B,
    dense_entries,
    make_entry,
    make_graph,
    make_pool,
    two_pool_entries,
)

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "USDE",
    "SUSDE",
    "FIXTURE_TOKENS",
    "ETHENA_MINT_ID",
    "CURVE_3POOL_ID",
    "UNIV3_USDC_WETH_ID",
    "UNIV3_DAI_USDC_ID",
    # Factories
    "POOL_A",
    "POOL_B",
    "dense_entries",
    "make_entry",
    "make_graph",
    "make_pool",
    "two_pool_entries",
]
