"""Configuration file and checkpoint I/O."""

from .checkpoint import (
    FINAL_NAME,
    INPUT_NAME,
    CheckpointWriter,
    checkpoint_name,
)
from .config import ConfigurationReader, ConfigurationWriter, read_state

__all__ = [
    "ConfigurationReader",
    "ConfigurationWriter",
    "read_state",
    "CheckpointWriter",
    "checkpoint_name",
    "INPUT_NAME",
    "FINAL_NAME",
]
