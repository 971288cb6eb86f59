"""
Groupbuy app services layer.

Services contain business logic and orchestrate operations across models.
State changes rely on conditional updates rather than row locks.
"""

from .deadline_sweeper import (
    SweepResult,
    expirable_commitments,
    select_expired_commitment_ids,
    expire_commitment,
    sweep_payment_deadlines,
)

__all__ = [
    'SweepResult',
    'expirable_commitments',
    'select_expired_commitment_ids',
    'expire_commitment',
    'sweep_payment_deadlines',
]
