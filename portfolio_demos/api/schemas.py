"""
Pydantic schemas for API requests
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


# Banking schemas
class BankingCommandRequest(BaseModel):
    command: str = Field(..., description="A single banking command, e.g. 'deposit 12345678 500'")


class BatchRequest(BaseModel):
    commands: List[str] = Field(default_factory=list)


# Bot schemas
class BotSimulateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    command: str = Field(..., min_length=1)
    params: Dict[str, Any] = Field(default_factory=dict)
    pools: Optional[Any] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
