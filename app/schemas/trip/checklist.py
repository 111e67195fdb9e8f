from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime


class ChecklistItem(BaseModel):
    id: str
    label: str
    checked: bool = False
    is_custom: bool = False


class ChecklistCategory(BaseModel):
    id: str
    name: str
    items: List[ChecklistItem] = []


class UserChecklist(BaseModel):
    user_id: int
    checklist: List[ChecklistCategory] = []
    updated_at: Optional[datetime] = None


# Request schemas
class ChecklistUpsert(BaseModel):
    checklist: List[ChecklistCategory]


class ChecklistItemCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=200)


# Response schemas
class ChecklistView(BaseModel):
    user_id: int
    is_personal: bool
    checklist: List[ChecklistCategory]


class CategoryProgress(BaseModel):
    total: int
    checked: int
    percentage: float


class ChecklistProgress(BaseModel):
    total_items: int
    checked_items: int
    completion_percentage: float
    by_category: Dict[str, CategoryProgress]
