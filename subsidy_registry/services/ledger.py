"""
Ledger gateway: the two primitives consumed from the hosting platform
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, List, Optional, Protocol, Tuple

from ..exceptions import TransferError
from ..utils.validators import validate_subsidy_amount

logger = logging.getLogger(__name__)


class LedgerGateway(Protocol):
    """Caller identification and value transfer provided by the ledger"""

    def current_caller(self) -> Hashable:
        ...

    def transfer_value(self, to: Hashable, amount: int) -> None:
        """Transfer ``amount`` to ``to`` or raise ``TransferError``"""
        ...


class InMemoryLedger:
    """
    Process-local ledger used for tests and local runs.

    The current caller is set per thread with ``act_as``. An optional
    ``treasury`` caps the total amount that can be paid out, and
    ``fail_next_transfers`` makes upcoming transfers fail.
    """

    def __init__(self, default_caller: Hashable = None, treasury: Optional[int] = None):
        self.default_caller = default_caller
        self.treasury = treasury
        self.balances: Dict[Hashable, int] = {}
        self.transfers: List[Tuple[Hashable, int]] = []
        self._failures_pending = 0
        self._local = threading.local()
        self._lock = threading.Lock()

    def current_caller(self) -> Hashable:
        return getattr(self._local, "caller", self.default_caller)

    @contextmanager
    def act_as(self, caller: Hashable):
        """Run the enclosed block with ``caller`` as the invoking identity"""
        previous = getattr(self._local, "caller", self.default_caller)
        self._local.caller = caller
        try:
            yield self
        finally:
            self._local.caller = previous

    def fail_next_transfers(self, count: int = 1) -> None:
        with self._lock:
            self._failures_pending = count

    def balance_of(self, account: Hashable) -> int:
        return self.balances.get(account, 0)

    def transfer_value(self, to: Hashable, amount: int) -> None:
        if not validate_subsidy_amount(amount):
            raise TransferError(f"Invalid transfer amount: {amount!r}")

        with self._lock:
            if self._failures_pending:
                self._failures_pending -= 1
                logger.error(f"Transfer of {amount} to {to!r} rejected by ledger")
                raise TransferError(f"Ledger rejected transfer of {amount} to {to!r}")

            if self.treasury is not None:
                if amount > self.treasury:
                    logger.error(f"Insufficient treasury for transfer of {amount} to {to!r}")
                    raise TransferError(
                        f"Insufficient treasury: {self.treasury} available, {amount} requested"
                    )
                self.treasury -= amount

            self.balances[to] = self.balances.get(to, 0) + amount
            self.transfers.append((to, amount))

        logger.info(f"Transferred {amount} to {to!r}")
