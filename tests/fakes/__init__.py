"""Test fakes for the create workflow."""

from tests.fakes.fake_services import (
    FakeProjectService,
    RecordingFollowOn,
    RecordingPipeline,
    ScriptedInteraction,
)

__all__ = [
    "FakeProjectService",
    "RecordingFollowOn",
    "RecordingPipeline",
    "ScriptedInteraction",
]
