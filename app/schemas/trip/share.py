from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class SharedUser(BaseModel):
    user_id: int
    email: str
    name: str
    shared_at: datetime


class ShareRequest(BaseModel):
    emails: List[str] = Field(default_factory=list)


class ShareResponse(BaseModel):
    message: str
    shared_with: List[SharedUser]
