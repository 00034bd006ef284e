from fastapi import APIRouter, Depends

from webstorage.dependencies import get_size_manager
from webstorage.notifications import OutOfSpaceNotifier
from webstorage.schemas.quota import AppCacheQuotaRequest, DatabaseQuotaRequest, QuotaDecisionResponse, StorageStatusResponse
from webstorage.size_manager import WebStorageSizeManager

router = APIRouter(tags=["quota"])


@router.get("/storage", response_model=StorageStatusResponse)
def get_storage_status(manager: WebStorageSizeManager = Depends(get_size_manager)):
    status = StorageStatusResponse(global_limit=manager.global_limit, app_cache_max_size=manager.app_cache_max_size)
    notifier = manager.notifier
    if isinstance(notifier, OutOfSpaceNotifier):
        status.out_of_space_count = notifier.count
        status.last_out_of_space_at = notifier.last_fired_at
    return status


@router.post("/quota/database", response_model=QuotaDecisionResponse)
def exceeded_database_quota(req: DatabaseQuotaRequest, manager: WebStorageSizeManager = Depends(get_size_manager)):
    decision = manager.on_exceeded_database_quota(req.url, req.database_identifier, req.current_quota, req.total_used_quota)
    return QuotaDecisionResponse.from_decision(decision)


@router.post("/quota/appcache", response_model=QuotaDecisionResponse)
def reached_max_app_cache_size(req: AppCacheQuotaRequest, manager: WebStorageSizeManager = Depends(get_size_manager)):
    decision = manager.on_reached_max_app_cache_size(req.space_needed, req.total_used_quota)
    return QuotaDecisionResponse.from_decision(decision)
