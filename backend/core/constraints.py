import logging
from typing import Iterable

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from core.records import ConstraintSetting

logger = logging.getLogger(__name__)


class ConstraintConfigError(ValueError):
    """Raised when a tenant's active constraints cannot be turned into settings."""


class RebalanceConstraints(BaseModel):
    """Tenant tunables for the planners. Unset names keep these defaults."""

    model_config = ConfigDict(frozen=True)

    min_cover_weeks: float = 2.0
    lateral_enabled: bool = True
    min_lateral_net_benefit: float = 500_000.0
    threshold_high_weeks: float = 6.0
    threshold_low_weeks: float = 1.0

    @model_validator(mode="after")
    def _validate_thresholds(self):
        if self.min_cover_weeks < 0:
            raise ValueError("min_cover_weeks must be >= 0")
        if self.threshold_low_weeks < 0:
            raise ValueError("threshold_low_weeks must be >= 0")
        if self.threshold_low_weeks >= self.threshold_high_weeks:
            raise ValueError("threshold_low_weeks must be lower than threshold_high_weeks")
        return self

    @classmethod
    def from_settings(cls, rows: Iterable[ConstraintSetting]) -> "RebalanceConstraints":
        """
        Build from registry rows.

        Inactive rows and names the engine does not know are ignored. Values
        stored as {"value": ...} objects are unwrapped.
        """
        known = set(cls.model_fields.keys())
        values = {}
        for row in rows:
            if not row.is_active:
                continue
            name = (row.name or "").strip()
            if name not in known:
                logger.debug("Ignoring unknown constraint %r", name)
                continue
            value = row.value
            if isinstance(value, dict) and "value" in value:
                value = value["value"]
            values[name] = value
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConstraintConfigError(f"Invalid constraint configuration: {e}") from e
