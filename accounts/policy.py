"""
Central access rules.

Every service that reads or mutates remittance data asks ``authorize`` (or
``enforce``) before touching the store, so role checks never get scattered
across views.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Optional

from core.exceptions import Forbidden, Unauthorized
from .profiles import Caller

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    CREATE_TRANSACTION = "create_transaction"
    READ_OWN_TRANSACTIONS = "read_own_transactions"
    READ_TRANSACTION = "read_transaction"
    READ_ALL_TRANSACTIONS = "read_all_transactions"
    SET_TRANSACTION_STATE = "set_transaction_state"
    READ_RATE = "read_rate"
    UPDATE_RATE = "update_rate"
    VIEW_STATISTICS = "view_statistics"


class Decision(str, enum.Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOW


ADMIN_OPERATIONS = frozenset(
    {
        Operation.READ_ALL_TRANSACTIONS,
        Operation.SET_TRANSACTION_STATE,
        Operation.UPDATE_RATE,
        Operation.VIEW_STATISTICS,
    }
)

# The target of these operations is the owner id being read or written.
OWNER_OPERATIONS = frozenset({Operation.CREATE_TRANSACTION, Operation.READ_OWN_TRANSACTIONS})


def _owner_of(target: Any):
    # Accepts an owner id or any record carrying ``owner_id``.
    return getattr(target, "owner_id", target)


def authorize(caller: Optional[Caller], operation: Operation, target: Any = None) -> Decision:
    if caller is None:
        return Decision.UNAUTHORIZED

    operation = Operation(operation)

    if operation in ADMIN_OPERATIONS:
        return Decision.ALLOW if caller.is_admin else Decision.FORBIDDEN

    if operation in OWNER_OPERATIONS:
        if target is None:
            return Decision.ALLOW
        return Decision.ALLOW if str(_owner_of(target)) == str(caller.user_id) else Decision.FORBIDDEN

    if operation == Operation.READ_TRANSACTION:
        if caller.is_admin or target is None:
            return Decision.ALLOW
        return Decision.ALLOW if str(_owner_of(target)) == str(caller.user_id) else Decision.FORBIDDEN

    if operation == Operation.READ_RATE:
        return Decision.ALLOW

    return Decision.FORBIDDEN


def enforce(caller: Optional[Caller], operation: Operation, target: Any = None) -> None:
    decision = authorize(caller, operation, target)
    if decision is Decision.UNAUTHORIZED:
        raise Unauthorized()
    if decision is Decision.FORBIDDEN:
        logger.info(
            "Denied %s for user=%s role=%s",
            Operation(operation).value,
            caller.user_id,
            caller.role,
        )
        raise Forbidden()
