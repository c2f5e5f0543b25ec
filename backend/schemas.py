from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from drawfeed.types import GameType


class ResultsQuery(BaseModel):
    type: GameType = Field(..., description="Game type selector, e.g. xsmb or power655.")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class StructuredNumbersResponse(BaseModel):
    main: List[int] = Field(..., min_length=6, max_length=6)
    special: int

    @field_validator("main")
    @classmethod
    def validate_main(cls, value: List[int]) -> List[int]:
        if sorted(value) != value:
            raise ValueError("Main numbers must be sorted ascending.")
        return value


class DrawResponse(BaseModel):
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    numbers: Union[StructuredNumbersResponse, List[int]]

    @field_validator("numbers")
    @classmethod
    def validate_numbers(cls, value):
        if isinstance(value, list) and len(value) == 0:
            raise ValueError("A draw needs at least one number.")
        return value


class ErrorResponse(BaseModel):
    error: str
    kind: str
    game_type: Optional[str] = None


class GameListResponse(BaseModel):
    games: List[str]
