"""
Domain models for scraped roster data and game content using Pydantic.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Kader / Spieler ---

# Always serialized, even when empty
ALWAYS_PRESENT = ("id", "name", "nationalities")

PLAYER_SCALAR_FIELDS = (
    "display_name",
    "shirt_number",
    "age",
    "contract_expiry",
    "market_value",
    "flag_image_url",
    "photo_image_url",
)


class PlayerRecord(BaseModel):
    """One roster row. All values are kept as the source shows them."""

    model_config = ConfigDict(populate_by_name=True)

    identity: str = Field(default="", alias="id")
    display_name: str = Field(default="", alias="name")
    shirt_number: str = Field(default="", alias="number")
    age: str = ""
    nationalities: list[str] = Field(default_factory=list)
    contract_expiry: str = Field(default="", alias="contract")
    market_value: str = ""
    flag_image_url: str = Field(default="", alias="flag_url")
    photo_image_url: str = Field(default="", alias="photo_url")

    @field_validator("nationalities", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_document(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True)
        return {k: v for k, v in data.items() if k in ALWAYS_PRESENT or v}


class TeamDocument(BaseModel):
    team: str
    players: list[PlayerRecord] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        return {"team": self.team, "players": [p.to_document() for p in self.players]}


# --- Quiz ---

class QuizGameData(BaseModel):
    question: str = ""
    answers: list[str] = Field(default_factory=list)


class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_data: QuizGameData = Field(alias="gameData")


class QuestionsCollection(BaseModel):
    questions: list[QuizQuestion] = Field(default_factory=list)


# --- Bingo (remote payload) ---

class RemoteCategory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = ""
    type: int = 0
    display_name: str = Field(default="", alias="displayName")
    prefix: Optional[str] = None
    helper_text: Optional[str] = Field(default=None, alias="helperText")


class RemotePlayer(BaseModel):
    id: int
    f: str = ""
    g: str = ""
    v: list[int] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        if self.g and self.f:
            return f"{self.g} {self.f}"
        return self.g or self.f


class RemoteGameData(BaseModel):
    remit: list[list[RemoteCategory]] = Field(default_factory=list)
    players: list[RemotePlayer] = Field(default_factory=list)


class RemoteBingoDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_data: RemoteGameData = Field(default_factory=RemoteGameData, alias="gameData")


# --- Bingo (normalized) ---

class BingoCategory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = ""
    display_name: str = Field(default="", alias="displayName")
    type: int = 0
    image: str = ""
    helper_text: Optional[str] = Field(default=None, alias="helperText")


class BingoPlayer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = ""
    category_ids: list[int] = Field(default_factory=list, alias="categoryIds")


class BingoGame(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_id: int = Field(alias="gameId")
    categories: list[BingoCategory] = Field(default_factory=list)
    players: list[BingoPlayer] = Field(default_factory=list)
