from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.enums import CreditType
from .credit.base import CreditPolicy
from .credit.policies import AfterThresholdPolicy, CompleteCarryoverPolicy, NoCarryoverPolicy, NoEvaluationPolicy

logger = logging.getLogger(__name__)

_POLICIES: dict[CreditType, CreditPolicy] = {
    CreditType.NO_EVALUATION: NoEvaluationPolicy(),
    CreditType.COMPLETE_CARRYOVER: CompleteCarryoverPolicy(),
    CreditType.AFTER_THRESHOLD: AfterThresholdPolicy(),
    CreditType.NO_CARRYOVER: NoCarryoverPolicy(),
}


@dataclass
class CreditPolicyFactory:
    """Factory Pattern: choose the credit policy for a month's evaluation rules."""

    def for_credit_type(self, credit_type: Optional[CreditType]) -> CreditPolicy:
        if credit_type is None:
            return _POLICIES[CreditType.NO_EVALUATION]
        try:
            return _POLICIES[CreditType(credit_type)]
        except ValueError:
            logger.warning("unknown credit type %r, falling back to %s", credit_type, CreditType.NO_EVALUATION.value)
            return _POLICIES[CreditType.NO_EVALUATION]
