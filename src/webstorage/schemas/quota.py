from datetime import datetime

from pydantic import BaseModel, Field

from webstorage.size_manager import QuotaDecision, QuotaOutcome


class DatabaseQuotaRequest(BaseModel):
    url: str = Field(..., min_length=1, description="URL of the origin that exceeded its quota")
    database_identifier: str = Field("", description="Database on which the overflowing transaction ran")
    current_quota: int = Field(..., ge=0, description="Current quota of the origin, 0 for a new origin")
    total_used_quota: int = Field(..., ge=0, description="Sum of the quotas of all origins")


class AppCacheQuotaRequest(BaseModel):
    space_needed: int = Field(..., ge=0, description="Bytes needed for the pending cache operation")
    total_used_quota: int = Field(..., ge=0, description="Sum of the quotas of all origins")


class QuotaDecisionResponse(BaseModel):
    quota: int
    outcome: QuotaOutcome
    granted: bool

    @classmethod
    def from_decision(cls, decision: QuotaDecision) -> "QuotaDecisionResponse":
        return cls(quota=decision.quota, outcome=decision.outcome, granted=decision.granted)


class StorageStatusResponse(BaseModel):
    global_limit: int
    app_cache_max_size: int
    out_of_space_count: int = 0
    last_out_of_space_at: datetime | None = None
