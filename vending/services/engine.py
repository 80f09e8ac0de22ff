"""
Vending Engine - Transaction state for a single vending machine.

Tracks in-flight currency, the return tray, the change reserve, product stock
and the next message for the front panel. Synchronous and not thread safe:
hosts that share an engine across callers must serialise access themselves.

Change is tracked as an aggregate value only, never as individual coins.
"exact change only" is therefore an approximation: it shows whenever the
reserve cannot cover the most expensive product, which does not guarantee
every specific amount of change can be paid.
"""

from collections.abc import Iterable, Sequence

from structlog import get_logger

from vending.exceptions import InvalidAmountError, InvalidCatalogError, ProductIndexError
from vending.models.api import (
    CatalogItem,
    EngineSnapshot,
    PurchaseOutcome,
    ReservePolicy,
    StockLevel,
)
from vending.models.domain import Product, StockEntry
from vending.observability.metrics import metrics
from vending.services.display import (
    MSG_EXACT_CHANGE_ONLY,
    MSG_INSERT_COIN,
    MSG_SOLD_OUT,
    MSG_THANK_YOU,
    format_currency,
    format_price,
)

logger = get_logger(__name__)

ACCEPTED_DENOMINATIONS: frozenset[int] = frozenset({2000, 5000, 10000, 20000, 50000})

CatalogLine = CatalogItem | tuple[str, int, int]


def _to_stock_entry(line: CatalogLine) -> StockEntry:
    """Build a StockEntry from a config model or a (name, cost, stock) tuple."""
    if isinstance(line, CatalogItem):
        name, cost_minor, initial_stock = line.name, line.cost_minor, line.initial_stock
    else:
        name, cost_minor, initial_stock = line
    return StockEntry(product=Product(name=name, cost_minor=cost_minor), available=initial_stock)


class VendingEngine:
    """
    Vending machine transaction engine.

    Every operation completes before returning. Rejected coins, short funds
    and sold out products are normal outcomes reported as False plus a
    display message; only configuration and caller mistakes raise.
    """

    def __init__(
        self,
        catalog: Sequence[CatalogLine],
        initial_change_reserve: int,
        accepted_denominations: Iterable[int] = ACCEPTED_DENOMINATIONS,
        reserve_policy: ReservePolicy = ReservePolicy.PERMIT_NEGATIVE,
    ) -> None:
        """
        Load the catalog and seed the change reserve.

        Raises InvalidCatalogError on an empty product name, a negative cost,
        stock or reserve, or a denomination set that can accept nothing.
        """
        if initial_change_reserve < 0:
            raise InvalidCatalogError(
                f"change reserve must be zero or greater: {initial_change_reserve}"
            )

        denominations = frozenset(accepted_denominations)
        if not denominations or any(d <= 0 for d in denominations):
            raise InvalidCatalogError(
                f"accepted denominations must be positive: {sorted(denominations)}"
            )

        self._catalog: tuple[StockEntry, ...] = tuple(_to_stock_entry(line) for line in catalog)
        self._denominations = denominations
        self._reserve_policy = reserve_policy

        self._current_balance = 0
        self._return_balance = 0
        self._change_reserve = initial_change_reserve
        self._pending_message = MSG_INSERT_COIN

        # Derive the idle message for this catalog and reserve up front
        self.refresh_display()

        metrics.set_change_reserve(self._change_reserve)
        logger.info(
            "engine_created",
            products=len(self._catalog),
            change_reserve_minor=self._change_reserve,
            reserve_policy=reserve_policy.value,
        )

    def __len__(self) -> int:
        return len(self._catalog)

    def __str__(self) -> str:
        return (
            f"{format_currency(self._current_balance)} in flight, "
            f"{format_currency(self._change_reserve)} in change, "
            f"and {len(self._catalog)} products"
        )

    # ========================================================================
    # Read-only state
    # ========================================================================

    @property
    def accepted_balance(self) -> int:
        """Currency inserted by the current user and not yet spent or returned."""
        return self._current_balance

    @property
    def change_reserve(self) -> int:
        return self._change_reserve

    @property
    def reserve_policy(self) -> ReservePolicy:
        return self._reserve_policy

    @property
    def accepted_denominations(self) -> frozenset[int]:
        return self._denominations

    def return_tray_value(self) -> int:
        """Value of the currency waiting in the return tray."""
        return self._return_balance

    def list_products(self) -> list[Product]:
        """Products in catalog order; position is the purchase index."""
        return [entry.product for entry in self._catalog]

    def product_at(self, index: int) -> Product:
        """Product in a catalog slot. Raises ProductIndexError for a missing slot."""
        if not 0 <= index < len(self._catalog):
            metrics.record_error("ProductIndexError", "product_at")
            raise ProductIndexError(index, len(self._catalog))
        return self._catalog[index].product

    def stock_levels(self) -> list[StockLevel]:
        return [
            StockLevel(
                index=i,
                name=entry.product.name,
                cost_minor=entry.product.cost_minor,
                available=entry.available,
            )
            for i, entry in enumerate(self._catalog)
        ]

    def snapshot(self) -> EngineSnapshot:
        """Serializable view of balances and stock. Does not touch the display."""
        return EngineSnapshot(
            accepted_minor=self._current_balance,
            return_tray_minor=self._return_balance,
            change_reserve_minor=self._change_reserve,
            pending_message=self._pending_message,
            stock=self.stock_levels(),
        )

    # ========================================================================
    # Operations
    # ========================================================================

    def insert_currency(self, amount: int) -> bool:
        """
        Take one coin or note.

        Accepted denominations add to the in-flight balance and put the new
        balance on the display. Anything else drops into the return tray and
        leaves the balance and display alone.
        """
        if amount < 0:
            metrics.record_error("InvalidAmountError", "insert_currency")
            raise InvalidAmountError(amount)

        if amount not in self._denominations:
            self._return_balance += amount
            metrics.record_insert(accepted=False, amount_minor=amount)
            logger.info(
                "currency_rejected",
                amount_minor=amount,
                return_tray_minor=self._return_balance,
            )
            return False

        self._current_balance += amount
        self._pending_message = format_currency(self._current_balance)
        metrics.record_insert(accepted=True, amount_minor=amount)
        logger.info(
            "currency_accepted",
            amount_minor=amount,
            balance_minor=self._current_balance,
        )
        return True

    def refresh_display(self) -> str:
        """
        Return the pending message and derive the next one.

        NOTE: the display runs one step behind. The value returned is the
        outcome of the previous action ("thank you", "price: $0.60", ...);
        the state-derived message only shows on the following call. Hosts
        call this once after every action, so changing it to derive first
        would hide every action outcome from the user.

        With no currency in flight the next message is "exact change only"
        when any product costs more than the change reserve, otherwise
        "insert coin". With currency in flight it is the formatted balance.
        """
        message = self._pending_message

        if self._current_balance == 0:
            self._pending_message = MSG_INSERT_COIN
            if any(entry.product.cost_minor > self._change_reserve for entry in self._catalog):
                self._pending_message = MSG_EXACT_CHANGE_ONLY
        else:
            self._pending_message = format_currency(self._current_balance)

        return message

    def purchase(self, index: int) -> bool:
        """
        Vend the product in a catalog slot.

        A slot that does not exist fails without touching any state.
        """
        if not 0 <= index < len(self._catalog):
            metrics.record_purchase(PurchaseOutcome.INVALID_INDEX.value)
            logger.info(
                "purchase_declined",
                index=index,
                reason=PurchaseOutcome.INVALID_INDEX.value,
            )
            return False
        return self._try_purchase(index, self._catalog[index])

    def _try_purchase(self, index: int, entry: StockEntry) -> bool:
        """Check stock, funds and change, then commit all balances at once."""
        product = entry.product

        if entry.sold_out:
            self._pending_message = MSG_SOLD_OUT
            return self._decline(index, product, PurchaseOutcome.SOLD_OUT)

        shortfall = product.cost_minor - self._current_balance
        if shortfall > 0:
            self._pending_message = format_price(product.cost_minor)
            return self._decline(index, product, PurchaseOutcome.INSUFFICIENT_FUNDS)

        change = -shortfall
        if self._reserve_policy is ReservePolicy.REJECT and change > self._change_reserve:
            self._pending_message = MSG_EXACT_CHANGE_ONLY
            return self._decline(index, product, PurchaseOutcome.INSUFFICIENT_CHANGE)

        entry.reduce_available()

        # Collected money is not recycled into the reserve; only the change
        # paid out is taken from it.
        self._change_reserve -= change
        if self._reserve_policy is ReservePolicy.CLAMP:
            self._change_reserve = max(self._change_reserve, 0)

        self._return_balance += change
        self._current_balance = 0
        self._pending_message = MSG_THANK_YOU

        metrics.record_purchase(PurchaseOutcome.COMPLETED.value, change_minor=change)
        metrics.set_change_reserve(self._change_reserve)
        logger.info(
            "purchase_completed",
            index=index,
            product=product.name,
            cost_minor=product.cost_minor,
            change_minor=change,
            available=entry.available,
            change_reserve_minor=self._change_reserve,
        )
        if self._change_reserve < 0:
            logger.warning(
                "change_reserve_overdrawn",
                change_reserve_minor=self._change_reserve,
                change_minor=change,
            )
        return True

    def _decline(self, index: int, product: Product, outcome: PurchaseOutcome) -> bool:
        metrics.record_purchase(outcome.value)
        logger.info(
            "purchase_declined",
            index=index,
            product=product.name,
            reason=outcome.value,
            balance_minor=self._current_balance,
        )
        return False

    def return_currency(self) -> None:
        """Send all in-flight currency to the return tray and reset the display."""
        returned = self._current_balance
        self._return_balance += returned
        self._current_balance = 0

        self.refresh_display()

        logger.info(
            "currency_returned",
            amount_minor=returned,
            return_tray_minor=self._return_balance,
        )

    def collect_return(self) -> None:
        """Empty the return tray."""
        collected = self._return_balance
        self._return_balance = 0
        logger.info("return_collected", amount_minor=collected)
