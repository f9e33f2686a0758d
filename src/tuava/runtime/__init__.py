"""Elm-style runtime - effects, streams and the program loop."""

from tuava.runtime.effect import (
    Batch,
    Effect,
    FromAsync,
    NoEffect,
    NONE,
    Once,
    Pure,
    Quit,
    QUIT,
)
from tuava.runtime.update import Model, Update
from tuava.runtime.stream import Stream, StreamHandle
from tuava.runtime.scheduler import ScheduledTask, Scheduler
from tuava.runtime.config import ProgramConfig
from tuava.runtime.program import Program

__all__ = [
    "Batch",
    "Effect",
    "FromAsync",
    "NoEffect",
    "NONE",
    "Once",
    "Pure",
    "Quit",
    "QUIT",
    "Model",
    "Update",
    "Stream",
    "StreamHandle",
    "ScheduledTask",
    "Scheduler",
    "ProgramConfig",
    "Program",
]
