"""
HTTP API Routes for NumberPoker.

These routes drive a single game from the browser or a script.
Routes that reach the solver are plain functions, so FastAPI runs them in its
threadpool.
The oxygen timer lives on the client in HTTP mode: it calls /decay_oxygen.
"""

from typing import Dict, Any, Optional
import logging

from fastapi import APIRouter, HTTPException

from numberpoker.core.game import NumberPokerGame, BetState, RoundResult
from numberpoker.core.rules import Difficulty, GamePhase
from numberpoker.core.ruleset import all_rules
from numberpoker.server.schemas import (
    NewGameRequest, SelectCardRequest, BetRequest, HistorySchema, RulesSchema,
)

router = APIRouter()

logger = logging.getLogger(__name__)

# Global game instance for single-room mode
# The WebSocket layer keeps one game per session instead
_game: Optional[NumberPokerGame] = None


def get_game() -> NumberPokerGame:
    """Get the current game instance."""
    global _game
    if _game is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return _game


def parse_difficulty(value: str) -> Difficulty:
    try:
        return Difficulty(value.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid difficulty: {value}")


def serialize_outcome(outcome: Any) -> Dict[str, Any]:
    """Wrap a BetState or RoundResult for the client."""
    if isinstance(outcome, RoundResult):
        return {"success": True, "kind": "result", "result": outcome.to_dict()}
    if isinstance(outcome, BetState):
        return {"success": True, "kind": "bet_state", "bet_state": outcome.to_dict()}
    return {"success": True, "kind": "none"}


@router.post("/new_game")
def new_game(req: NewGameRequest) -> Dict[str, Any]:
    """
    Start a new game at the requested difficulty.

    Deals both players' numbers and collects the round 1 ante.
    """
    global _game

    difficulty = parse_difficulty(req.difficulty)
    _game = NumberPokerGame(difficulty=difficulty, seed=req.seed)
    _game.start_new_game(difficulty)

    logger.info(f"HTTP game started ({difficulty.value})")
    return {
        "success": True,
        "message": f"Game started ({difficulty.value})",
        "state": _game.get_state(),
    }


@router.post("/select_card")
def select_card(req: SelectCardRequest) -> Dict[str, Any]:
    """Play one of the human's numbers. May include the AI's opening move."""
    game = get_game()

    outcome = game.select_card(req.index)
    if outcome is None:
        logger.warning(f"Rejected select_card({req.index}) in phase {game.phase}")
        raise HTTPException(status_code=400, detail="Cannot select that number now")

    return serialize_outcome(outcome)


@router.post("/bet")
def bet(req: BetRequest) -> Dict[str, Any]:
    """
    Bet, check/call (0) or fold (-1).

    The AI answers inside the same request.
    """
    game = get_game()

    outcome = game.process_player_bet(req.amount)
    if outcome is None:
        logger.warning(f"Rejected bet({req.amount}) in phase {game.phase}")
        raise HTTPException(status_code=400, detail="Not your turn to bet")

    return serialize_outcome(outcome)


@router.post("/start_round")
def start_round() -> Dict[str, Any]:
    """Begin the next round, or report that the game is over."""
    game = get_game()

    if game.phase != GamePhase.RESULT:
        raise HTTPException(status_code=400, detail="Cannot start round")

    started = game.start_round()
    return {
        "success": started,
        "game_over": game.is_game_over() or game.numbers_exhausted,
        "final_standing": game.final_standing().value if not started else None,
        "round": game.round_number,
        "state": game.get_state(),
    }


@router.post("/decay_oxygen")
async def decay_oxygen() -> Dict[str, Any]:
    """One oxygen tick."""
    game = get_game()

    result = game.decay_oxygen()
    if result is None:
        return {"success": False, "message": "Oxygen is paused"}

    return {
        "success": True,
        **result.to_dict(),
        "human_chips": game.human_chips,
        "ai_chips": game.ai_chips,
    }


@router.get("/get_game_state")
async def get_game_state() -> Dict[str, Any]:
    """Get the current game state as seen by the human."""
    return get_game().get_state()


@router.get("/history", response_model=HistorySchema)
async def get_history() -> Dict[str, Any]:
    """Rounds played so far."""
    game = get_game()
    return {"history": [record.to_dict() for record in game.history]}


@router.get("/rules", response_model=RulesSchema)
async def get_rules() -> Dict[str, Any]:
    """The candidate rules the secret one is drawn from."""
    return {"rules": [rule.to_dict() for rule in all_rules()]}


@router.post("/reset_game")
async def reset_game() -> Dict[str, Any]:
    """
    Reset the game (for development/testing).
    """
    global _game
    _game = None
    return {"success": True, "message": "Game reset"}
