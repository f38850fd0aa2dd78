"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# ============= Request Schemas =============

class NewGameRequest(BaseModel):
    """Request to start a new game."""
    difficulty: str = Field(default="NORMAL", description="EASY, NORMAL, HARD or GOD")
    seed: Optional[int] = Field(default=None, description="Seed for reproducible games")


class SelectCardRequest(BaseModel):
    """Request to play one of the human's numbers."""
    index: int = Field(..., ge=0, description="Index into the human's remaining numbers")


class BetRequest(BaseModel):
    """Request to bet. -1 folds, 0 checks/calls for free."""
    amount: int = Field(default=0, ge=-1, description="Chips to add this turn, or -1 to fold")


# ============= Response Schemas =============

class RuleSchema(BaseModel):
    """A candidate rule (the secret one is never marked)."""
    id: str
    name: str
    description: str


class RoundRecordSchema(BaseModel):
    """One finished round."""
    round: int
    human_number: Optional[int] = None
    ai_number: Optional[int] = None
    winner: str
    pot: int
    method: str


class HistorySchema(BaseModel):
    """Rounds played so far."""
    history: List[RoundRecordSchema]


class RulesSchema(BaseModel):
    """The candidate rules."""
    rules: List[RuleSchema]


# ============= WebSocket Message Schemas =============

class WSStartGameMessage(BaseModel):
    """WebSocket start game message."""
    type: str = "start_game"
    difficulty: str = "NORMAL"
    seed: Optional[int] = None


class WSSelectCardMessage(BaseModel):
    """WebSocket number selection message."""
    type: str = "select_card"
    index: int = Field(..., ge=0)


class WSBetMessage(BaseModel):
    """WebSocket bet message."""
    type: str = "bet"
    amount: int = Field(default=0, ge=-1)


class WSOxygenMessage(BaseModel):
    """WebSocket oxygen tick message."""
    type: str = "oxygen"
    human_chips: int
    ai_chips: int
    is_game_over: bool


class WSGameOverMessage(BaseModel):
    """WebSocket game over message."""
    type: str = "game_over"
    final_standing: str
    human_chips: int
    ai_chips: int
    secret_rule: Optional[RuleSchema] = None

