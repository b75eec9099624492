"""
Skill matching workflow.

Finds the skills relevant to a problem, the persons holding them, and the
person best suited to solve the problem. Every step waits for the previous
one; any store or client error aborts the run.
"""

from __future__ import annotations

from config.config import Config, get_config
from config.logging_utils import get_logger, log_match_decision, log_phase_start
from graph_store.skill_store import SkillStore
from models import SkillMatchReport
from utils.model_utils import short_reason

from matching.prompts import (
    FIND_MATCHING_PERSON_PROMPT,
    extract_skills_prompt,
    matching_person_message,
    necessary_skills_prompt,
)
from matching.schemas import BestMatchingPerson, PersonSkills, UsefulSkills
from matching.structured_extractor import StructuredExtractor


class SkillMatcher:
    """Match a problem description to the person with the most useful skills."""

    def __init__(
        self,
        store: SkillStore,
        extractor: StructuredExtractor,
        config: Config | None = None,
        logger=None,
    ):
        self.store = store
        self.extractor = extractor
        self.config = config or get_config()
        self.logger = logger or get_logger(__name__)

    def run(self, problem: str) -> SkillMatchReport | None:
        """Run all four steps for ``problem``.

        Returns None when no relevant skills were found; the person lookup and
        the final match are skipped in that case.
        """
        log_phase_start(self.logger, "discover known skills")
        known_skills = self.store.list_all_skills()
        self.logger.info(f"{len(known_skills)} known skills")

        relevant_skills = self.find_necessary_skills(problem, known_skills)
        if not relevant_skills:
            self.logger.info("No relevant skills found; nothing to match")
            return None
        self.logger.info(f"Relevant skills: {', '.join(relevant_skills)}")

        person_skills = self.build_person_skill_map(relevant_skills)
        match = self.find_matching_person(person_skills, problem)

        return SkillMatchReport(
            problem=problem,
            known_skills=known_skills,
            relevant_skills=relevant_skills,
            person_skills=person_skills,
            match=match,
        )

    def find_best_match(self, problem: str) -> BestMatchingPerson | None:
        """Return only the chosen person for ``problem``, or None."""
        report = self.run(problem)
        return report.match if report else None

    def find_necessary_skills(
        self, problem: str, existing_skills: list[str]
    ) -> list[str]:
        """Ask the model which skills help with ``problem``.

        Without existing skills the model may name any skills. An absent
        extraction counts as no skills.
        """
        log_phase_start(self.logger, "find necessary skills")
        result = self.extractor.extract(
            necessary_skills_prompt(existing_skills),
            problem,
            UsefulSkills,
            schema_name="useful-skills",
        )
        if result is None:
            return []
        return list(result.skills)

    def build_person_skill_map(self, skills: list[str]) -> dict[str, list[str]]:
        """Map each person holding one of ``skills`` to the skills they hold.

        Skills keep the order they were given in; persons keep the order of
        their first appearance.
        """
        log_phase_start(self.logger, "locate candidate persons")
        person_skills: dict[str, list[str]] = {}
        seen_skills: set[str] = set()

        for skill in skills:
            if skill in seen_skills:
                continue
            seen_skills.add(skill)

            for person_name in self.store.list_persons_with_skill(skill):
                held = person_skills.setdefault(person_name, [])
                if skill not in held:
                    held.append(skill)

        self.logger.info(f"{len(person_skills)} candidate persons")
        return person_skills

    def find_matching_person(
        self, person_skills: dict[str, list[str]], problem: str
    ) -> BestMatchingPerson | None:
        """Ask the model to pick the best suited person among ``person_skills``."""
        log_phase_start(self.logger, "select best match")
        match = self.extractor.extract(
            FIND_MATCHING_PERSON_PROMPT,
            matching_person_message(person_skills, problem),
            BestMatchingPerson,
            schema_name="best-matching-person",
        )
        if match is None:
            log_match_decision(
                self.logger, problem, None, "model returned no match", len(person_skills)
            )
        else:
            log_match_decision(
                self.logger,
                problem,
                match.person_name,
                short_reason(match.reason),
                len(person_skills),
            )
        return match

    def extract_person_skills(
        self, person_name: str, text: str, existing_skills: list[str]
    ) -> list[str] | None:
        """Extract the skills of ``person_name`` from ``text``.

        Returns None when the model produced no usable answer.
        """
        log_phase_start(self.logger, "extract person skills")
        result = self.extractor.extract(
            extract_skills_prompt(person_name, existing_skills),
            text,
            PersonSkills,
            schema_name="person",
        )
        if result is None:
            return None
        return list(result.skills)

    def record_person_skills(
        self, person_name: str, text: str, persist: bool | None = None
    ) -> list[str]:
        """Extract skills from ``text`` and optionally store them for ``person_name``.

        Writing is controlled by ``persist``, falling back to the
        PERSIST_EXTRACTED_SKILLS setting, which is off by default.
        """
        known_skills = self.store.list_all_skills()
        skills = self.extract_person_skills(person_name, text, known_skills) or []

        should_persist = persist
        if should_persist is None:
            should_persist = self.config.persist_extracted_skills

        if not should_persist:
            self.logger.info(
                f"Extracted {len(skills)} skills for {person_name}; persistence disabled"
            )
            return skills

        for skill in skills:
            self.store.assign_skill(person_name, skill)
        self.logger.info(f"Stored {len(skills)} skills for {person_name}")
        return skills
