"""
WebSocket handling for real-time game communication.

This module provides:
- GameManager: Manages game sessions and their oxygen timers
- WebSocket endpoint: Handles real-time player connections and game actions
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass, field
import logging
import asyncio

from fastapi import WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from numberpoker.core.game import NumberPokerGame, BetState, RoundResult
from numberpoker.core.rules import Difficulty, GamePhase, OXYGEN_DECAY_SECONDS
from numberpoker.server.schemas import (
    RuleSchema, WSBetMessage, WSGameOverMessage, WSOxygenMessage,
    WSSelectCardMessage, WSStartGameMessage,
)


logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """A game session with its engine, connections and oxygen ticker."""
    session_id: str
    game: NumberPokerGame
    connections: Dict[str, WebSocket] = field(default_factory=dict)
    ticker: Optional[asyncio.Task] = None
    game_over_sent: bool = False
    _lock: Optional[asyncio.Lock] = field(default=None, repr=False)

    @property
    def lock(self) -> asyncio.Lock:
        """One engine call at a time; created inside the running event loop."""
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def run(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking engine call in the threadpool."""
        async with self.lock:
            return await run_in_threadpool(func, *args)

    async def broadcast(self, message: Dict[str, Any], exclude: Optional[str] = None):
        """Broadcast a message to all connections."""
        for client_id, ws in list(self.connections.items()):
            if client_id != exclude:
                try:
                    await ws.send_json(message)
                except Exception as e:
                    logger.error(f"Error sending to {client_id}: {e}")

    async def send_state_to_all(self):
        """Send the human-view game state to every connection."""
        await self.broadcast({"type": "state", **self.game.get_state()})

    def game_over_message(self) -> Dict[str, Any]:
        game = self.game
        rule = game.reveal_rule()
        return WSGameOverMessage(
            final_standing=game.final_standing().value,
            human_chips=game.human_chips,
            ai_chips=game.ai_chips,
            secret_rule=RuleSchema(**rule.to_dict()) if rule else None,
        ).model_dump()

    async def check_game_over(self) -> bool:
        """Broadcast game_over once, when the game ends or numbers run out."""
        game = self.game
        finished = game.is_game_over() or (
            game.phase == GamePhase.RESULT and game.numbers_exhausted
        )
        if finished and not self.game_over_sent:
            self.game_over_sent = True
            await self.broadcast(self.game_over_message())
        return finished


class GameManager:
    """
    Manages game sessions and player connections.

    Usage:
        manager = GameManager()
        session_id = manager.create_session()
        await manager.handle_message(session_id, client_id, message)
        await manager.disconnect(session_id, client_id)
    """

    def __init__(self, decay_interval: float = OXYGEN_DECAY_SECONDS):
        self.sessions: Dict[str, GameSession] = {}
        self.decay_interval = decay_interval
        self._session_counter = 0

    def create_session(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        seed: Optional[int] = None,
    ) -> str:
        """Create a new game session."""
        self._session_counter += 1
        session_id = f"session-{self._session_counter}"

        game = NumberPokerGame(difficulty=difficulty, seed=seed)
        self.sessions[session_id] = GameSession(session_id=session_id, game=game)
        logger.info(f"Created {session_id} ({difficulty.value})")

        return session_id

    def get_session(self, session_id: str) -> Optional[GameSession]:
        """Get a session by ID."""
        return self.sessions.get(session_id)

    async def disconnect(self, session_id: str, client_id: str):
        """Disconnect a client. The oxygen timer stops with the last one."""
        session = self.get_session(session_id)
        if session and client_id in session.connections:
            del session.connections[client_id]
            logger.info(f"Client {client_id} disconnected from {session_id}")

            if not session.connections:
                self.stop_oxygen(session)

    # ------------------------------------------------------------------
    # Oxygen timer
    # ------------------------------------------------------------------

    def start_oxygen(self, session: GameSession) -> None:
        """(Re)start the session's oxygen ticker."""
        self.stop_oxygen(session)
        session.ticker = asyncio.create_task(self._oxygen_loop(session))

    def stop_oxygen(self, session: GameSession) -> None:
        if session.ticker is not None:
            session.ticker.cancel()
            session.ticker = None

    async def _oxygen_loop(self, session: GameSession) -> None:
        """Decay both players every ``decay_interval`` seconds until the game ends."""
        game = session.game
        while True:
            await asyncio.sleep(self.decay_interval)

            async with session.lock:
                result = game.decay_oxygen()
            if result is None:
                # Paused between rounds
                if game.is_game_over():
                    break
                continue

            await session.broadcast(WSOxygenMessage(
                human_chips=game.human_chips,
                ai_chips=game.ai_chips,
                is_game_over=result.is_game_over,
            ).model_dump())

            if result.is_game_over:
                await session.check_game_over()
                break

        if session.ticker is asyncio.current_task():
            session.ticker = None

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def handle_message(
        self,
        session_id: str,
        client_id: str,
        message: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Handle a message from a client.

        Args:
            session_id: The session ID
            client_id: The client ID
            message: The message dict with 'type' and optional data

        Returns:
            Response dict
        """
        session = self.get_session(session_id)
        if session is None:
            return {"type": "error", "message": "Session not found"}

        msg_type = message.get("type", "")

        if msg_type == "start_game":
            return await self._handle_start_game(session, message)
        elif msg_type == "select_card":
            return await self._handle_select_card(session, message)
        elif msg_type == "bet":
            return await self._handle_bet(session, message)
        elif msg_type == "start_round":
            return await self._handle_start_round(session)
        elif msg_type == "get_state":
            return {"type": "state", **session.game.get_state()}
        else:
            return {"type": "error", "message": f"Unknown message type: {msg_type}"}

    async def _handle_start_game(
        self,
        session: GameSession,
        message: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Start (or restart) the session's game and its oxygen timer."""
        try:
            msg = WSStartGameMessage(**message)
            difficulty = Difficulty(msg.difficulty.upper())
        except (ValidationError, ValueError):
            return {"type": "error", "message": f"Invalid difficulty: {message.get('difficulty')}"}

        if msg.seed is not None:
            session.game.rng.seed(msg.seed)
        session.game_over_sent = False
        await session.run(session.game.start_new_game, difficulty)
        self.start_oxygen(session)

        await session.send_state_to_all()
        await session.check_game_over()

        return {"type": "game_started", "difficulty": difficulty.value}

    async def _handle_select_card(
        self,
        session: GameSession,
        message: Dict[str, Any]
    ) -> Dict[str, Any]:
        try:
            msg = WSSelectCardMessage(**message)
        except ValidationError:
            return {"type": "error", "message": "index must be a non-negative integer"}

        outcome = await session.run(session.game.select_card, msg.index)
        if outcome is None:
            return {"type": "error", "message": "Cannot select that number now"}

        return await self._after_move(session, outcome)

    async def _handle_bet(
        self,
        session: GameSession,
        message: Dict[str, Any]
    ) -> Dict[str, Any]:
        try:
            msg = WSBetMessage(**message)
        except ValidationError:
            return {"type": "error", "message": "amount must be an integer of at least -1"}

        outcome = await session.run(session.game.process_player_bet, msg.amount)
        if outcome is None:
            return {"type": "error", "message": "Not your turn to bet"}

        return await self._after_move(session, outcome)

    async def _handle_start_round(self, session: GameSession) -> Dict[str, Any]:
        game = session.game
        if game.phase != GamePhase.RESULT:
            return {"type": "error", "message": "Cannot start round"}

        started = await session.run(game.start_round)
        await session.send_state_to_all()
        await session.check_game_over()

        return {"type": "round_started" if started else "round_refused", "round": game.round_number}

    async def _after_move(self, session: GameSession, outcome: Any) -> Dict[str, Any]:
        """Broadcast the new state and report the move's outcome."""
        await session.send_state_to_all()

        if isinstance(outcome, RoundResult):
            await session.broadcast({"type": "result", **outcome.to_dict()})
            await session.check_game_over()
            return {"type": "round_result", **outcome.to_dict()}

        if isinstance(outcome, BetState):
            return {"type": "bet_state", **outcome.to_dict()}

        return {"type": "error", "message": "Unexpected outcome"}


# Global game manager instance
game_manager = GameManager()


async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for game communication.

    Protocol:
    1. Client connects and sends: {"type": "join", "session_id": "...", "client_id": "..."}
       (an unknown or missing session_id creates a new session)
    2. Server sends game state
    3. Client sends: start_game, select_card, bet, start_round, get_state
    4. Server broadcasts state, result, oxygen and game_over messages
    """
    session_id: Optional[str] = None
    client_id: Optional[str] = None

    try:
        await websocket.accept()
        join_msg = await websocket.receive_json()

        if join_msg.get("type") != "join":
            await websocket.send_json({
                "type": "error",
                "message": "First message must be join"
            })
            await websocket.close()
            return

        session_id = join_msg.get("session_id")
        client_id = join_msg.get("client_id") or "human"

        session = game_manager.get_session(session_id) if session_id else None
        if session is None:
            session_id = game_manager.create_session()
            session = game_manager.get_session(session_id)

        session.connections[client_id] = websocket
        logger.info(f"Client {client_id} joined {session_id}")

        await websocket.send_json({
            "type": "joined",
            "session_id": session_id,
            **session.game.get_state(),
        })

        # Message loop
        while True:
            message = await websocket.receive_json()
            response = await game_manager.handle_message(session_id, client_id, message)
            await websocket.send_json(response)

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {client_id}")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        if session_id and client_id:
            await game_manager.disconnect(session_id, client_id)
