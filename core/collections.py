from typing import List, Optional

from models.collection import Collection

TEST_CATEGORY_MARKER = "test"

def filter_collections(
    collections: List[Collection],
    is_created_by_unic: bool = False,
    filter_test_override: bool = False,
    chain: Optional[str] = None,
    creator_address: Optional[str] = None
) -> List[Collection]:
    """Display filtering applied to collection listings"""
    results = collections
    if creator_address:
        results = [c for c in results if c.creator_address == creator_address]
    if is_created_by_unic:
        results = [c for c in results if c.is_created_by_unic]
    if not filter_test_override:
        # Test collections are hidden unless explicitly requested
        results = [c for c in results if TEST_CATEGORY_MARKER not in (c.category or "")]
    if chain:
        results = [c for c in results if c.chain == chain]
    return results
