"""Pydantic models for commands, stages and pipelines."""

from __future__ import annotations

import shlex
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

_SHELL_OPERATORS: frozenset[str] = frozenset(
    {"|", "||", "&&", ";", ";;", ">", ">>", "<", "<<", "<<<", "(", ")", "{", "}", "&"}
)


def parse_command_line(line: str) -> dict[str, Any]:
    """Tokenize a shell-like *line* into ``program``/``args`` fields.

    Commands are spawned without a shell, so shell operators are rejected
    instead of being passed through as literal arguments.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as exc:
        raise ValueError(f"invalid command syntax in {line!r}: {exc}") from None
    if not tokens:
        raise ValueError("empty command")
    for tok in tokens:
        if tok in _SHELL_OPERATORS:
            raise ValueError(
                f"shell operator '{tok}' is not allowed in {line!r}; "
                "list each command separately instead"
            )
    return {"program": tokens[0], "args": tuple(tokens[1:])}


class Command(BaseModel):
    """An executable plus its arguments. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    program: str = Field(min_length=1)
    args: tuple[str, ...] = ()
    cwd: str | None = None
    check: bool = True

    @model_validator(mode="before")
    @classmethod
    def _from_line(cls, data: Any) -> Any:
        if isinstance(data, str):
            return parse_command_line(data)
        return data

    @classmethod
    def parse(cls, line: str, **kwargs: Any) -> Command:
        """Build a Command from a single shell-like line."""
        return cls(**parse_command_line(line), **kwargs)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


class Stage(BaseModel):
    name: str = Field(min_length=1)
    title: str = ""
    commands: list[Command] = []

    @property
    def label(self) -> str:
        return self.title or self.name


class Pipeline(BaseModel):
    name: str
    stages: list[Stage] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_stage_names(self) -> Pipeline:
        seen: set[str] = set()
        for stage in self.stages:
            if stage.name in seen:
                raise ValueError(f"Duplicate stage name: '{stage.name}'")
            seen.add(stage.name)
        return self

    @property
    def stage_names(self) -> list[str]:
        return [s.name for s in self.stages]
