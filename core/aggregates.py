from sqlalchemy import func
from sqlalchemy.orm import Session

from models.nft import NFT
from schemas.collection import ScanAndViewTotals

def collection_scan_and_view_totals(db: Session, collection_id: str) -> ScanAndViewTotals:
    """Sum scan and view counters over every NFT in a collection"""
    total_scan_count, total_view_count = (
        db.query(
            func.coalesce(func.sum(func.coalesce(NFT.scan_count, 0)), 0),
            func.coalesce(func.sum(func.coalesce(NFT.view_count, 0)), 0),
        )
        .filter(NFT.collection_id == collection_id)
        .one()
    )
    return ScanAndViewTotals(
        total_scan_count=int(total_scan_count),
        total_view_count=int(total_view_count)
    )
