"""Money on the wire — exact Decimal in Python, JSON number in responses.

Invariants:
    - Arithmetic never sees a float: the conversion happens only in JSON serialization
    - Amounts fit Numeric(12, 2), so the float a client receives round-trips to the
      same two-decimal value
"""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json"),
]
