import os
import tomllib
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Self


class FaultPolicy(StrEnum):
    """What happens when an exception escapes a resumed body."""

    TERMINATE = "terminate"
    RAISE = "raise"

    @classmethod
    def parse(cls, value: str) -> Self:
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(f"'{policy}'" for policy in cls)
            raise ValueError(
                f"Fault policy must be one of {choices}, got: '{value}'"
            ) from None


@dataclass(kw_only=True)
class Config:
    fault: FaultPolicy = FaultPolicy.TERMINATE

    @staticmethod
    def __pyproject() -> Path | None:
        for path in [cwd := Path.cwd(), *cwd.parents]:
            candidate = path / "pyproject.toml"
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def __tool_config(cls) -> dict:
        if pyproject := cls.__pyproject():
            with pyproject.open("rb") as f:
                config = tomllib.load(f)
            return config.get("tool", {}).get("resumable", {})
        return {}

    @classmethod
    def load(cls) -> Self:
        """Load configuration from the environment and pyproject.toml.

        The RESUMABLE_FAULT environment variable takes precedence over
        the 'fault' key of [tool.resumable] in the nearest pyproject.toml.
        """
        fault = os.environ.get("RESUMABLE_FAULT")
        if not fault:
            fault = cls.__tool_config().get("fault")
        if not fault:
            return cls()
        return cls(fault=FaultPolicy.parse(fault))
