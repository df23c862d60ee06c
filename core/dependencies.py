from fastapi import Depends

from config.settings import Settings, get_settings
from utilities.ipfs import PinningClient
from utilities.supabase_client import BlobStorage, get_supabase

def get_blob_storage(settings: Settings = Depends(get_settings)) -> BlobStorage:
    """Blob storage over the cached Supabase client"""
    return BlobStorage(get_supabase(settings.SUPABASE_URL, settings.SUPABASE_KEY))

def get_pinning_client(settings: Settings = Depends(get_settings)) -> PinningClient:
    return PinningClient(settings)
