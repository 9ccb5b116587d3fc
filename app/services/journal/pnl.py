"""Realised P&L for a trade being closed."""

from dataclasses import dataclass

from app.services.journal.records import is_winning_pnl, safe_number

DIRECTIONS = ("long", "short")


@dataclass
class CloseResult:
    pnl_amount: float
    pnl_percentage: float
    is_winning: bool


def compute_close_pnl(
    direction: str,
    entry_price: float,
    exit_price: float,
    position_size: float,
) -> tuple[float, float]:
    """(amount, percentage) for closing a position at `exit_price`.

    Raises ValueError for a direction other than long/short.
    """
    direction = (direction or "").lower()
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction '{direction}'. Expected one of: {', '.join(DIRECTIONS)}")

    entry = safe_number(entry_price)
    exit_ = safe_number(exit_price)
    size = safe_number(position_size)

    move = exit_ - entry if direction == "long" else entry - exit_
    amount = move * size
    pct = move / entry * 100 if entry != 0 else 0.0
    return amount, pct


def resolve_close(
    direction: str,
    entry_price: float,
    exit_price: float,
    position_size: float,
    pnl_amount: float | None = None,
    pnl_percentage: float | None = None,
) -> CloseResult:
    """Use the P&L the trader entered; compute it only when either figure is missing."""
    if pnl_amount is None or pnl_percentage is None:
        pnl_amount, pnl_percentage = compute_close_pnl(
            direction, entry_price, exit_price, position_size
        )
    amount = safe_number(pnl_amount)
    return CloseResult(
        pnl_amount=amount,
        pnl_percentage=safe_number(pnl_percentage),
        is_winning=is_winning_pnl(amount),
    )
