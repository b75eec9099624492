"""Graph storage for persons and skills."""

from .skill_store import GraphStoreConnectionError, SkillFinderError, SkillStore

__all__ = ["SkillStore", "SkillFinderError", "GraphStoreConnectionError"]
