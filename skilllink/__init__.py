"""SkillLink client core: connections, profiles, events, chat and reflections."""

__version__ = "1.0.0"
