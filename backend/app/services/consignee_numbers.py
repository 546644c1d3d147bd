"""Human-facing tracking numbers: prefix + epoch milliseconds + 0-999 suffix."""

from __future__ import annotations

import random
import time

from app.config import settings


def generate_consignee_number(prefix: str | None = None) -> str:
    # Not collision-proof on its own; the unique constraint plus the
    # retry loop in create_shipment make it so.
    if prefix is None:
        prefix = settings.consignee_number_prefix
    timestamp = int(time.time() * 1000)
    suffix = random.randint(0, 999)
    return f"{prefix}{timestamp}{suffix}"
