"""Upstream scheduling API payloads."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ScheduleEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    day: str
    classroom: Optional[str] = None
    building: Optional[str] = None
    time_from: str
    time_to: str


class Commission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    schedule: List[ScheduleEntry] = Field(default_factory=list)


class Subject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    section: str
    subject_id: str
    name: str
    credits: int = 0
    dependencies: List[str] = Field(default_factory=list)
    credits_required: Optional[int] = None
    course_start: Optional[str] = None
    course_end: Optional[str] = None
    commissions: List[Commission] = Field(default_factory=list)


# category -> year -> semester -> subjects, e.g. Electivas["0"]["0"]
Catalog = Dict[str, Dict[str, Dict[str, List[Subject]]]]
