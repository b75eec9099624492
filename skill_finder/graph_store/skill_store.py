"""
Neo4j-backed store of persons and their skills.

Persons and skills are nodes identified by name; a person holds a skill
through a HAS_SKILL relationship.
"""

from __future__ import annotations

import logging
from typing import Any

from config.config import Config
from neo4j import GraphDatabase, RoutingControl
from neo4j.exceptions import DriverError, Neo4jError

logger = logging.getLogger(__name__)

ALL_SKILLS_QUERY = "MATCH (skill:Skill) RETURN skill.skillName AS skillName"

PERSONS_WITH_SKILL_QUERY = (
    "MATCH (person:Person)-[:HAS_SKILL]->(skill:Skill { skillName: $skillName }) "
    "RETURN person.personName AS personName"
)

ASSIGN_SKILL_QUERY = (
    "MERGE (person:Person { personName: $personName }) "
    "MERGE (skill:Skill { skillName: $skillName }) "
    "MERGE (person)-[:HAS_SKILL]->(skill)"
)


class SkillFinderError(Exception):
    """Base error for skill finder."""


class GraphStoreConnectionError(SkillFinderError):
    """The graph database could not be reached."""


class SkillStore:
    """Run the skill queries against a Neo4j driver"""

    def __init__(self, driver: Any, database: str | None = None):
        self.driver = driver
        self.database = database

    @classmethod
    def from_config(cls, config: Config) -> "SkillStore":
        """Connect using the NEO4J_* settings and verify the server is reachable"""
        logger.debug("Connecting to database...")
        driver = None
        try:
            driver = GraphDatabase.driver(
                config.neo4j_uri,
                auth=(config.neo4j_username, config.neo4j_password),
            )
            driver.verify_connectivity()
        except (DriverError, Neo4jError) as exc:
            if driver is not None:
                driver.close()
            raise GraphStoreConnectionError(
                f"Can't connect to database at {config.neo4j_uri}: {exc}"
            ) from exc
        return cls(driver, database=config.neo4j_database)

    def close(self):
        self.driver.close()

    def __enter__(self) -> "SkillStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def list_all_skills(self) -> list[str]:
        """Return the names of all skills in the database"""
        logger.debug("Getting all skills...")
        result = self.driver.execute_query(
            ALL_SKILLS_QUERY,
            database_=self.database,
            routing_=RoutingControl.READ,
        )
        return [
            record["skillName"]
            for record in result.records
            if record["skillName"] is not None
        ]

    def list_persons_with_skill(self, skill_name: str) -> list[str]:
        """Return the names of all persons holding ``skill_name``"""
        logger.debug(f"Getting persons with skill {skill_name}...")
        result = self.driver.execute_query(
            PERSONS_WITH_SKILL_QUERY,
            parameters_={"skillName": skill_name},
            database_=self.database,
            routing_=RoutingControl.READ,
        )
        return [
            record["personName"]
            for record in result.records
            if record["personName"] is not None
        ]

    def assign_skill(self, person_name: str, skill_name: str) -> None:
        """Create person, skill and HAS_SKILL edge unless they already exist"""
        logger.info(f"Adding skill {skill_name} to {person_name}")
        self.driver.execute_query(
            ASSIGN_SKILL_QUERY,
            parameters_={"personName": person_name, "skillName": skill_name},
            database_=self.database,
        )
