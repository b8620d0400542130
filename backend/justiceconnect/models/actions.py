"""
Quick action model - starter questions shown on an empty chat.
"""

from typing import List
from pydantic import BaseModel

from .session import Language


class QuickAction(BaseModel):
    label: str
    question: str


class QuickActionList(BaseModel):
    language: Language
    actions: List[QuickAction]
