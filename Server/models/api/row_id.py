"""
GreenPlan Server - Row ID Type

Bounds for ids sent by clients. Primary keys are positive and must fit
a signed 64-bit integer column.
"""

from typing import Annotated

from pydantic import Field

ROW_ID_MAX = 2**63 - 1

RowId = Annotated[int, Field(ge=1, le=ROW_ID_MAX)]
