"""Output shapes requested from the model and validated on the way back."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class UsefulSkills(BaseModel):
    """Skills judged relevant to a problem, most useful first."""

    model_config = ConfigDict(extra="forbid")

    skills: List[str]


class PersonSkills(BaseModel):
    """Skills extracted from a text about one person."""

    model_config = ConfigDict(extra="forbid")

    name: str
    skills: List[str]


class BestMatchingPerson(BaseModel):
    """The person chosen for a problem plus a short justification."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    person_name: str = Field(alias="personName")
    reason: str
