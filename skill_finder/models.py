"""Domain models for skill matching runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from matching.schemas import BestMatchingPerson


@dataclass
class SkillMatchReport:
    problem: str
    known_skills: List[str] = field(default_factory=list)
    relevant_skills: List[str] = field(default_factory=list)
    person_skills: Dict[str, List[str]] = field(default_factory=dict)
    match: Optional[BestMatchingPerson] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "problem": self.problem,
            "known_skills": list(self.known_skills),
            "relevant_skills": list(self.relevant_skills),
            "person_skills": {
                name: list(skills) for name, skills in self.person_skills.items()
            },
            "match": self.match.model_dump(by_alias=True) if self.match else None,
        }
