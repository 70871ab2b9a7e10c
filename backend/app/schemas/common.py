from decimal import Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer

# valor monetario: Decimal internamente, numero no JSON
Money = Annotated[
    Decimal,
    Field(max_digits=12, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]

PositiveMoney = Annotated[Money, Field(gt=0)]
