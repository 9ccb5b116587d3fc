"""Load journal trades from a CSV or JSON export."""

import json
import logging
from pathlib import Path

import pandas as pd

from app.services.journal.records import TradeRecord

logger = logging.getLogger(__name__)


def load_trades(path: str | Path) -> list[TradeRecord]:
    """Read trades from a .csv or .json file.

    JSON may be a list of trade objects or {"trades": [...]}, the shape the
    journal API returns. Raises ValueError for any other file type.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        df = pd.read_csv(path)
        df = df.astype(object).where(pd.notna(df), None)
        rows = df.to_dict(orient="records")
    elif suffix == ".json":
        with open(path) as f:
            data = json.load(f)
        rows = data.get("trades", []) if isinstance(data, dict) else data
    else:
        raise ValueError(f"Unsupported trade file '{path.name}'. Use .csv or .json")

    trades = [TradeRecord.from_dict(row) for row in rows if isinstance(row, dict)]
    logger.info("Loaded %d trades from %s", len(trades), path)
    return trades
