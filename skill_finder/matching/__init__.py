"""Skill matching workflow and its LLM extraction client."""
