"""
Test fixtures and utilities for skill finder tests
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest
from config.config import Config
from config.logging_utils import StructuredFormatter
from graph_store.skill_store import (
    ALL_SKILLS_QUERY,
    ASSIGN_SKILL_QUERY,
    PERSONS_WITH_SKILL_QUERY,
    SkillStore,
)
from matching.structured_extractor import StructuredExtractor


class FakeGraphDriver:
    """In-memory stand-in for a neo4j Driver that understands the store's queries."""

    def __init__(self, skills=None, has_skill=None):
        self.persons: list[str] = []
        self.skills: list[str] = list(skills or [])
        self.edges: list[tuple[str, str]] = []
        self.queries: list[tuple[str, dict]] = []
        self.closed = False
        for person_name, skill_name in has_skill or []:
            self._merge(person_name, skill_name)

    def _merge(self, person_name, skill_name):
        if person_name not in self.persons:
            self.persons.append(person_name)
        if skill_name not in self.skills:
            self.skills.append(skill_name)
        if (person_name, skill_name) not in self.edges:
            self.edges.append((person_name, skill_name))

    def execute_query(self, query, parameters_=None, **kwargs):
        params = parameters_ or {}
        self.queries.append((query, params))

        if query == ALL_SKILLS_QUERY:
            records = [{"skillName": name} for name in self.skills]
        elif query == PERSONS_WITH_SKILL_QUERY:
            records = [
                {"personName": person}
                for person, skill in self.edges
                if skill == params["skillName"]
            ]
        elif query == ASSIGN_SKILL_QUERY:
            self._merge(params["personName"], params["skillName"])
            records = []
        else:
            raise AssertionError(f"Unexpected query: {query}")

        return SimpleNamespace(records=records, summary=None, keys=[])

    def verify_connectivity(self):
        return None

    def close(self):
        self.closed = True


class FakeOpenAIClient:
    """Minimal stub mimicking chat.completions.create; replies are served in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, SimpleNamespace):
            return reply
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=reply, refusal=None))]
        )

    def system_prompt(self, index: int = 0) -> str:
        return self.requests[index]["messages"][0]["content"]

    def user_message(self, index: int = 0) -> str:
        return self.requests[index]["messages"][1]["content"]


def refusal(text: str) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=None, refusal=text))]
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_env(monkeypatch, temp_dir):
    """Set up mock environment variables"""
    env_vars = {
        "NEO4J_URI": "neo4j://localhost:7687",
        "NEO4J_USERNAME": "neo4j",
        "NEO4J_PASSWORD": "test_password",
        "NEO4J_DATABASE": "neo4j",
        "OPENAI_API_KEY": "test-api-key",
        "OPENAI_MODEL": "gpt-4o",
        "OPENAI_TEMPERATURE": "0",
        "PERSIST_EXTRACTED_SKILLS": "false",
        "LOG_LEVEL": "INFO",
        "LOG_DIR": str(temp_dir / "logs"),
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars


@pytest.fixture
def config(mock_env):
    return Config()


@pytest.fixture
def graph_driver():
    """Graph with a few persons and skills"""
    return FakeGraphDriver(
        skills=["Java", "JavaScript", "Rust", "C#"],
        has_skill=[
            ("Ada Lovelace", "Java"),
            ("Lius Hohmann", "JavaScript"),
            ("Lius Hohmann", "C#"),
            ("Grace Hopper", "Rust"),
            ("Grace Hopper", "JavaScript"),
        ],
    )


@pytest.fixture
def skill_store(graph_driver):
    return SkillStore(graph_driver, database="neo4j")


@pytest.fixture
def make_extractor(config):
    """Build a StructuredExtractor over a FakeOpenAIClient serving ``replies``"""

    def _make(*replies):
        client = FakeOpenAIClient(*replies)
        return StructuredExtractor(openai_client=client, config=config), client

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so later tests don't write to closed streams"""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, StructuredFormatter):
            root.removeHandler(handler)
            handler.close()
