"""Generation job use cases: trigger, poll, dispatch and callback handling."""

from app.application.use_cases.generation.supervisor import GenerationJobSupervisor

__all__ = ["GenerationJobSupervisor"]
