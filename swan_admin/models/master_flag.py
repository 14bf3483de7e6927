from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, conint

from swan_admin.models.collection_types import MasterFields


class FlagCounts(BaseModel):
    """Distribution of the etradePatternLookup flag across the master collection."""
    total: conint(ge=0) = 0
    enabled: conint(ge=0) = 0
    disabled: conint(ge=0) = 0
    missing: conint(ge=0) = 0

    @property
    def converged(self) -> bool:
        return self.missing == 0

    @property
    def non_boolean(self) -> int:
        """Records whose flag is present but neither true nor false."""
        return max(self.total - self.enabled - self.disabled - self.missing, 0)


class TickerFlag(BaseModel):
    ticker: Any = None
    name: Any = None
    # Raw stored value, None means the field is absent on the document
    etrade_pattern_lookup: Any = Field(default=None, alias=MasterFields.ETRADE_PATTERN_LOOKUP)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "TickerFlag":
        return cls(**{
            MasterFields.TICKER: doc.get(MasterFields.TICKER),
            MasterFields.NAME: doc.get(MasterFields.NAME),
            MasterFields.ETRADE_PATTERN_LOOKUP: doc.get(MasterFields.ETRADE_PATTERN_LOOKUP),
        })

    def describe(self) -> str:
        value = self.etrade_pattern_lookup
        if value is None:
            state = "<missing>"
        elif isinstance(value, bool):
            state = str(value).lower()
        else:
            state = f"{value!r} ({type(value).__name__})"
        label = f"{self.ticker} ({self.name})" if self.name else f"{self.ticker}"
        return f"{label}: etradePatternLookup={state}"


class UpdateSummary(BaseModel):
    matched: conint(ge=0) = 0
    modified: conint(ge=0) = 0

    @classmethod
    def from_result(cls, result) -> "UpdateSummary":
        """Build from a pymongo UpdateResult."""
        return cls(matched=result.matched_count, modified=result.modified_count)


class BackfillReport(BaseModel):
    before: FlagCounts
    update: UpdateSummary
    after: FlagCounts
    enabled: Optional[UpdateSummary] = None

    @property
    def succeeded(self) -> bool:
        return self.after.converged
