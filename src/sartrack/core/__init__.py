"""Core business logic.

Modules:
- catalog: Skills, behaviors, exercises and behavior-exercise links
- dogs: Dog registry
- session_manager: Session lifecycle and read projections
- round_recorder: Round validation, numbering and storage
- proficiency: Proficiency rule and rebuild
- auth: Users, password hashing and bearer tokens
"""

__all__ = [
    "auth",
    "catalog",
    "dogs",
    "proficiency",
    "round_recorder",
    "session_manager",
]
