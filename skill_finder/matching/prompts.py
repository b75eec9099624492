"""System and user messages sent to the model."""

from __future__ import annotations

import json

from utils.model_utils import format_skill_list

FIND_MATCHING_PERSON_PROMPT = (
    "Find the person with the best matching skillset to solve the problem "
    "and justify your decision shortly."
)


def necessary_skills_prompt(existing_skills: list[str]) -> str:
    """Prompt for picking skills that help with a problem.

    With known skills the model must choose from them; without any it is free
    to name the skills itself.
    """
    if not existing_skills:
        return (
            "Find the skills (preferably in one word) that could help the most "
            "with the problem the user describes."
        )
    return (
        "Find the skills out of the following list that could help the most "
        f"with the problem the user describes. {format_skill_list(existing_skills)}"
    )


def extract_skills_prompt(person_name: str, existing_skills: list[str]) -> str:
    """Prompt for extracting the skills of a person from free text."""
    prompt = f"Extract the skills (preferably in one word) of the person called {person_name}."
    if existing_skills:
        prompt += (
            " The following skills already exist and can be used, but if the "
            "person has skills not in this list, create a new one: "
            f"{format_skill_list(existing_skills)}"
        )
    return prompt


def matching_person_message(person_skills: dict[str, list[str]], problem: str) -> str:
    """User message carrying the problem and the candidate persons."""
    return (
        f"The problem is the following: '{problem}' and the persons with the "
        f"skills are the following: {json.dumps(person_skills, ensure_ascii=False)}"
    )
