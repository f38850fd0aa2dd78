"""
NumberPoker Game Engine - State Machine Implementation.

This module implements the round/betting protocol of NumberPoker.
It handles:
- Game setup (secret rule, tiered dealing of each player's five numbers)
- Phases: SELECT -> BETTING -> RESULT -> (SELECT | GAME_OVER)
- Ante collection, turn hand-off, raise limits and insolvency clamps
- Showdown through the solver, pot settlement and collision penalties
- The banned-card world shared across rounds
- Oxygen decay, triggered from outside

The engine never raises on a bad command: actions outside their phase or
turn return None (or False) and leave the state untouched.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Tuple, Any, Set
from dataclasses import dataclass
import logging
import random

from numberpoker.agents.base import AIAction, BaseAgent
from numberpoker.agents.poker_ai import PokerAI
from numberpoker.core.card import Card, Deck
from numberpoker.core.hand import (
    CATEGORY_BAND, category_floor, evaluate_hand, get_hand_description,
)
from numberpoker.core.player import Player
from numberpoker.core.rules import (
    GamePhase, ActionType, Difficulty, Side, Winner, ResolutionMethod,
    GameConfig, TokenTier, HAND_SIZE, TOKEN_FALLBACK_TRIALS,
    get_ante, get_first_better, calculate_max_raise,
    calculate_collision_penalty, split_pot,
)
from numberpoker.core.ruleset import Rule, all_rules
from numberpoker.core.solver import NO_HAND_SCORE, SolveResult, find_best_hand


logger = logging.getLogger(__name__)


FOLD_AMOUNT = -1


@dataclass(frozen=True)
class RoundRecord:
    """One finished round in the game history."""
    round_number: int
    human_number: Optional[int]
    ai_number: Optional[int]
    winner: Winner
    pot: int
    method: ResolutionMethod

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round_number,
            "human_number": self.human_number,
            "ai_number": self.ai_number,
            "winner": self.winner.value,
            "pot": self.pot,
            "method": self.method.value,
        }


@dataclass(frozen=True)
class BetState:
    """Snapshot of a round that is still being bet on."""
    phase: GamePhase
    round_number: int
    turn: Side
    human_number: Optional[int]
    ai_number: Optional[int]  # Hidden until betting begins
    pot: int
    human_bet_total: int
    ai_bet_total: int
    call_amount: int
    min_bet: int
    max_raise: int
    ai_action: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.name,
            "round": self.round_number,
            "turn": self.turn.value,
            "human_number": self.human_number,
            "ai_number": self.ai_number,
            "pot": self.pot,
            "human_bet_total": self.human_bet_total,
            "ai_bet_total": self.ai_bet_total,
            "call_amount": self.call_amount,
            "min_bet": self.min_bet,
            "max_raise": self.max_raise,
            "ai_action": self.ai_action,
        }


@dataclass(frozen=True)
class RoundResult:
    """Snapshot of a resolved round."""
    round_number: int
    winner: Winner
    is_showdown: bool
    pot: int
    human_chips: int
    ai_chips: int
    human_number: Optional[int]
    ai_number: Optional[int]
    human_score: Optional[int] = None
    ai_score: Optional[int] = None
    is_collision: bool = False
    penalty: int = 0
    human_hand: Tuple[str, ...] = ()
    ai_hand: Tuple[str, ...] = ()
    human_hand_description: Optional[str] = None
    ai_hand_description: Optional[str] = None
    numbers_exhausted: bool = False
    phase: GamePhase = GamePhase.RESULT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.name,
            "round": self.round_number,
            "winner": self.winner.value,
            "is_showdown": self.is_showdown,
            "pot": self.pot,
            "human_chips": self.human_chips,
            "ai_chips": self.ai_chips,
            "human_number": self.human_number,
            "ai_number": self.ai_number,
            "human_score": self.human_score,
            "ai_score": self.ai_score,
            "is_collision": self.is_collision,
            "penalty": self.penalty,
            "human_hand": list(self.human_hand),
            "ai_hand": list(self.ai_hand),
            "human_hand_description": self.human_hand_description,
            "ai_hand_description": self.ai_hand_description,
            "numbers_exhausted": self.numbers_exhausted,
        }


@dataclass(frozen=True)
class DecayResult:
    """Outcome of one oxygen tick."""
    human_decayed: bool
    ai_decayed: bool
    is_game_over: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "human_decayed": self.human_decayed,
            "ai_decayed": self.ai_decayed,
            "is_game_over": self.is_game_over,
        }


class NumberPokerGame:
    """
    NumberPoker game engine implementing a state machine.

    Usage:
        game = NumberPokerGame(seed=7)
        game.start_new_game(Difficulty.NORMAL)

        state = game.select_card(0)
        while game.phase == GamePhase.BETTING:
            state = game.process_player_bet(0)   # check / call

        result = state                            # RoundResult
        game.start_round()
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        agent: Optional[BaseAgent] = None,
        rule: Optional[Rule] = None,
    ):
        """
        Initialize a new game (call start_new_game to deal).

        Args:
            difficulty: AI difficulty
            config: Tunable settings
            seed: Seed for the shared random source
            rng: Shared random source (overrides seed)
            agent: Opponent (a PokerAI by default)
            rule: Fix the secret rule instead of drawing one per game
        """
        self.config = config or GameConfig()
        self.rng = rng or random.Random(seed)
        self.difficulty = difficulty
        self.agent: BaseAgent = agent or PokerAI(difficulty, rng=self.rng)
        self._fixed_rule = rule

        self._players: Dict[Side, Player] = {
            Side.HUMAN: Player(player_id=Side.HUMAN.value, chips=self.config.starting_chips),
            Side.AI: Player(player_id=Side.AI.value, chips=self.config.starting_chips),
        }

        # Banned cards never come back to the deck
        self._banned_ids: Set[str] = set()
        self._secret_rule: Optional[Rule] = None

        # Round state
        self._phase: Optional[GamePhase] = None
        self._round = 1
        self._pot = 0
        self._turn = Side.HUMAN
        self._first_better = Side.HUMAN
        self._selected: Dict[Side, int] = {Side.HUMAN: -1, Side.AI: -1}
        self._actions_taken = 0
        self._ai_last_action: Optional[str] = None

        self._history: List[RoundRecord] = []
        self._last_result: Optional[RoundResult] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Optional[GamePhase]:
        """Current phase (None before the first game starts)."""
        return self._phase

    @property
    def round_number(self) -> int:
        return self._round

    @property
    def pot(self) -> int:
        return self._pot

    @property
    def turn(self) -> Side:
        return self._turn

    @property
    def first_better(self) -> Side:
        return self._first_better

    @property
    def history(self) -> Tuple[RoundRecord, ...]:
        return tuple(self._history)

    @property
    def banned_cards(self) -> frozenset:
        return frozenset(self._banned_ids)

    @property
    def last_result(self) -> Optional[RoundResult]:
        return self._last_result

    @property
    def human_numbers(self) -> Tuple[int, ...]:
        return tuple(self._players[Side.HUMAN].numbers)

    @property
    def human_chips(self) -> int:
        return self._players[Side.HUMAN].chips

    @property
    def ai_chips(self) -> int:
        return self._players[Side.AI].chips

    def wins(self, side: Side) -> int:
        return self._players[side].wins

    def bet_total(self, side: Side) -> int:
        """Chips a side has committed this round."""
        return self._players[side].round_bet

    @property
    def numbers_exhausted(self) -> bool:
        """True once either player has no numbers left to play."""
        return any(not p.numbers for p in self._players.values())

    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    def reveal_rule(self) -> Optional[Rule]:
        """The secret rule, disclosed only once the game is over."""
        if self._phase == GamePhase.GAME_OVER or (
            self._phase == GamePhase.RESULT and self.numbers_exhausted
        ):
            return self._secret_rule
        return None

    def final_standing(self) -> Winner:
        """Who is ahead on chips."""
        human, ai = self.human_chips, self.ai_chips
        if human > ai:
            return Winner.HUMAN
        if ai > human:
            return Winner.AI
        return Winner.DRAW

    # ------------------------------------------------------------------
    # Game setup
    # ------------------------------------------------------------------

    def start_new_game(self, difficulty: Optional[Difficulty] = None) -> bool:
        """
        Reset all state, deal both players' numbers and begin round 1.

        Returns:
            True if round 1 started, False if it went straight to GAME_OVER
        """
        if difficulty is not None:
            self.difficulty = difficulty
        self.agent.on_game_start(self.difficulty)

        self._round = 1
        self._banned_ids.clear()
        self._history = []
        self._last_result = None
        for player in self._players.values():
            player.reset_for_new_game(self.config.starting_chips)

        self._secret_rule = self._fixed_rule or self.rng.choice(all_rules())
        logger.info(f"Starting new game ({self.difficulty.value})")
        logger.debug(f"Secret rule: {self._secret_rule.rule_id}")

        self._deal_numbers()
        return self._begin_round()

    def _deal_numbers(self) -> None:
        """Deal five numbers to each player from disjoint halves of a fresh deck."""
        deck = Deck(banned_ids=self._banned_ids, rng=self.rng)
        half = len(deck) // 2

        human = self._players[Side.HUMAN]
        ai = self._players[Side.AI]
        human.numbers = self._generate_tiered_numbers(deck.draw(half), forbidden=set())
        # The AI never holds a number the human holds
        ai.numbers = self._generate_tiered_numbers(deck.draw(half), forbidden=set(human.numbers))

        logger.debug(f"Dealt numbers: human={human.numbers} ai={ai.numbers}")

    def _generate_tiered_numbers(self, pool: List[Card], forbidden: Set[int]) -> List[int]:
        """Draw one hand per strength tier and turn each into a number."""
        remaining = list(pool)
        numbers: List[int] = []

        for tier in self.config.token_tiers:
            hand, number = self._draw_tiered_hand(remaining, tier, forbidden)
            if hand is None:
                break
            used = set(hand)
            remaining = [c for c in remaining if c not in used]
            numbers.append(number)

        self.rng.shuffle(numbers)
        return numbers

    def _draw_tiered_hand(
        self,
        pool: List[Card],
        tier: TokenTier,
        forbidden: Set[int],
    ) -> Tuple[Optional[List[Card]], Optional[int]]:
        """Find a hand whose strength falls in ``tier`` and whose number is allowed."""
        if len(pool) < HAND_SIZE:
            return None, None

        rule = self._secret_rule
        low = category_floor(tier.min_rank)
        high = category_floor(tier.max_rank) + CATEGORY_BAND - 1

        for _ in range(self.config.token_search_trials):
            sample = self.rng.sample(pool, HAND_SIZE)
            number = rule.calc(sample)
            if low <= evaluate_hand(sample) <= high and number not in forbidden:
                return sample, number

        # No hand in the tier: settle for any hand with an allowed number
        sample, number = None, None
        for _ in range(TOKEN_FALLBACK_TRIALS):
            sample = self.rng.sample(pool, HAND_SIZE)
            number = rule.calc(sample)
            if number not in forbidden:
                break
        return sample, number

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def start_round(self) -> bool:
        """
        Begin the next round after a result.

        Exhausted numbers leave the phase at RESULT: ending the game is then
        up to the caller.

        Returns:
            True if the round started, False otherwise (phase may now be GAME_OVER)
        """
        if self._phase != GamePhase.RESULT:
            logger.warning(f"Cannot start round in phase {self._phase}")
            return False
        if self.numbers_exhausted:
            logger.info("No numbers left to play")
            return False
        return self._begin_round()

    def _begin_round(self) -> bool:
        """Collect antes and let the AI pre-select its number."""
        self._phase = GamePhase.SELECT
        self._pot = 0
        self._selected = {Side.HUMAN: -1, Side.AI: -1}
        self._actions_taken = 0
        self._ai_last_action = None
        self._first_better = get_first_better(self._round)
        self._turn = self._first_better
        for player in self._players.values():
            player.reset_for_new_round()

        ante = get_ante(self._round)
        if not all(p.can_afford(ante) for p in self._players.values()):
            self._phase = GamePhase.GAME_OVER
            logger.info(f"Game over: ante {ante} cannot be paid")
            return False

        self._pay(Side.HUMAN, ante)
        self._pay(Side.AI, ante)

        ai = self._players[Side.AI]
        if ai.numbers:
            secret_rule, true_cards = self._true_state_for(self.agent)
            index = self.agent.decide_number_to_play(ai.numbers, secret_rule, true_cards)
            if not ai.has_number(index):
                index = self.rng.randrange(len(ai.numbers))
            self._selected[Side.AI] = index

        logger.info(f"Starting round #{self._round} (ante {ante}, pot {self._pot})")
        return True

    def select_card(self, index: int) -> Optional[Any]:
        """
        The human picks which number to play.

        Returns:
            BetState, a RoundResult if the AI's opening move ended the round,
            or None if the selection is not allowed right now
        """
        if self._phase != GamePhase.SELECT:
            return None

        if not self._players[Side.HUMAN].has_number(index) or self._selected[Side.AI] < 0:
            logger.warning(f"Invalid selection index {index}")
            return None

        self._selected[Side.HUMAN] = index
        self._phase = GamePhase.BETTING
        self._turn = self._first_better

        logger.debug(
            f"Round #{self._round}: human plays {self._selected_number(Side.HUMAN)}, "
            f"ai plays {self._selected_number(Side.AI)}"
        )

        if self._turn == Side.AI:
            return self._process_ai_turn()
        return self.get_bet_state()

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    def process_player_bet(self, amount: int) -> Optional[Any]:
        """
        Process the human's betting action.

        Args:
            amount: -1 to fold, 0 to check or call for free, otherwise the
                chips added this turn (call amount plus any raise)

        Returns:
            BetState if betting continues, RoundResult if the round ended,
            None if it is not the human's turn
        """
        if self._phase != GamePhase.BETTING or self._turn != Side.HUMAN:
            return None

        if amount == FOLD_AMOUNT:
            self._players[Side.HUMAN].fold()
            logger.info(f"Round #{self._round}: human folds")
            return self._resolve_fold(winner=Side.AI)

        if amount < 0:
            return None

        call_amount = self._call_amount(Side.HUMAN)
        max_total = call_amount + calculate_max_raise(self._pot)
        amount = max(call_amount, min(amount, max_total))

        return self._apply_bet(Side.HUMAN, amount)

    def _process_ai_turn(self) -> Any:
        """Ask the agent for an action and apply it."""
        ai = self._players[Side.AI]
        call_amount = self._call_amount(Side.AI)
        max_raise = calculate_max_raise(self._pot)

        my_score: Optional[int] = None
        opponent_score: Optional[int] = None
        if self.agent.is_omniscient:
            pool = self._valid_cards()
            my_score = self._estimate_score(self._selected_number(Side.AI), pool)
            opponent_score = self._estimate_score(self._selected_number(Side.HUMAN), pool)

        action: AIAction = self.agent.decide_action(
            call_amount, ai.chips, max_raise, my_score, opponent_score, self._round
        )
        self._ai_last_action = action.type.value
        logger.info(f"Round #{self._round}: ai {action.type.value} {action.amount}")

        if action.type == ActionType.FOLD:
            ai.fold()
            return self._resolve_fold(winner=Side.HUMAN)

        amount = call_amount
        if action.type == ActionType.RAISE:
            amount += max(0, min(action.amount, max_raise))
        return self._apply_bet(Side.AI, amount)

    def _apply_bet(self, side: Side, amount: int) -> Any:
        """
        Commit chips for ``side`` and route the turn.

        Equal totals end the betting, except for the first better's opening
        check. Unequal totals go to whoever committed less.
        """
        self._pay(side, amount)
        self._actions_taken += 1

        mine = self._players[side].round_bet
        theirs = self._players[side.opponent].round_bet

        if mine == theirs:
            if self._actions_taken == 1 and side == self._first_better:
                return self._hand_turn_to(side.opponent)
            return self._resolve_showdown()

        if mine > theirs:
            return self._hand_turn_to(side.opponent)

        # Short all-in: the caller could not cover the bet
        self._return_uncalled()
        return self._resolve_showdown()

    def _hand_turn_to(self, side: Side) -> Any:
        self._turn = side
        if side == Side.AI:
            return self._process_ai_turn()
        return self.get_bet_state()

    def _return_uncalled(self) -> None:
        """Give the bigger bettor back whatever the other side could not match."""
        human = self._players[Side.HUMAN]
        ai = self._players[Side.AI]
        excess = abs(human.round_bet - ai.round_bet)
        bigger = human if human.round_bet > ai.round_bet else ai
        self._pot -= bigger.refund(excess)

    def _pay(self, side: Side, amount: int) -> int:
        """Move chips into the pot, clamped to the payer's balance."""
        paid = self._players[side].pay(amount)
        self._pot += paid
        return paid

    def _call_amount(self, side: Side) -> int:
        return max(0, self._players[side.opponent].round_bet - self._players[side].round_bet)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _resolve_fold(self, winner: Side) -> RoundResult:
        """The non-folder takes the pot. No cards are revealed."""
        self._phase = GamePhase.RESULT
        pot = self._pot
        human_number = self._selected_number(Side.HUMAN)
        ai_number = self._selected_number(Side.AI)

        self._players[winner].receive(pot)
        self._players[winner].wins += 1

        self._record_history(Winner(winner.value), pot, ResolutionMethod.FOLD)
        self._consume_numbers()
        self._clear_pot()

        result = RoundResult(
            round_number=self._round - 1,
            winner=Winner(winner.value),
            is_showdown=False,
            pot=pot,
            human_chips=self.human_chips,
            ai_chips=self.ai_chips,
            human_number=human_number,
            ai_number=ai_number,
            numbers_exhausted=self.numbers_exhausted,
        )
        return self._finish_round(result)

    def _resolve_showdown(self) -> RoundResult:
        """Solve both numbers against the real pool and settle the pot."""
        self._phase = GamePhase.RESULT
        pool = self._valid_cards()
        rule = self._secret_rule
        human_number = self._selected_number(Side.HUMAN)
        ai_number = self._selected_number(Side.AI)

        human_result = self._solve(human_number, pool)
        ai_result = self._solve(ai_number, pool)
        human_score = human_result.score if human_result.found else NO_HAND_SCORE
        ai_score = ai_result.score if ai_result.found else NO_HAND_SCORE

        if human_score > ai_score:
            winner = Winner.HUMAN
        elif ai_score > human_score:
            winner = Winner.AI
        else:
            winner = Winner.DRAW

        is_collision = (
            human_result.found and ai_result.found
            and bool(set(human_result.hand) & set(ai_result.hand))
        )

        pot = self._pot
        human = self._players[Side.HUMAN]
        ai = self._players[Side.AI]
        penalty = 0

        if winner == Winner.HUMAN:
            human.receive(pot)
            human.wins += 1
            if is_collision:
                penalty = ai.penalize(calculate_collision_penalty(pot))
        elif winner == Winner.AI:
            ai.receive(pot)
            ai.wins += 1
            if is_collision:
                penalty = human.penalize(calculate_collision_penalty(pot))
        else:
            human_share, ai_share = split_pot(pot)
            human.receive(human_share)
            ai.receive(ai_share)

        if is_collision and winner != Winner.DRAW:
            logger.info(f"TENSAI! {winner.value} wins and the loser pays {penalty} extra")

        for solved in (human_result, ai_result):
            if solved.found:
                self._banned_ids.update(solved.card_ids)

        # Only genuine matches are evidence about the rule
        if human_result.matched:
            self.agent.learn(human_number, human_result.hand)
        if ai_result.matched:
            self.agent.learn(ai_number, ai_result.hand)

        self._record_history(winner, pot, ResolutionMethod.SHOWDOWN)
        self._consume_numbers()
        self._clear_pot()

        logger.info(
            f"Showdown round #{self._round - 1}: human {human_score} vs ai {ai_score} "
            f"-> {winner.value} (pot {pot})"
        )

        result = RoundResult(
            round_number=self._round - 1,
            winner=winner,
            is_showdown=True,
            pot=pot,
            human_chips=self.human_chips,
            ai_chips=self.ai_chips,
            human_number=human_number,
            ai_number=ai_number,
            human_score=human_score,
            ai_score=ai_score,
            is_collision=is_collision,
            penalty=penalty,
            human_hand=tuple(human_result.card_ids),
            ai_hand=tuple(ai_result.card_ids),
            human_hand_description=get_hand_description(human_result.hand),
            ai_hand_description=get_hand_description(ai_result.hand),
            numbers_exhausted=self.numbers_exhausted,
        )
        return self._finish_round(result)

    def _finish_round(self, result: RoundResult) -> RoundResult:
        self._last_result = result
        self.agent.on_round_end(result.to_dict())
        return result

    def _solve(self, number: int, pool: List[Card]) -> SolveResult:
        return find_best_hand(
            number, self._secret_rule, pool,
            self.config.showdown_trials, rng=self.rng,
            fallback=self.config.solver_fallback,
        )

    def _estimate_score(self, number: int, pool: List[Card]) -> int:
        result = find_best_hand(
            number, self._secret_rule, pool,
            self.config.god_estimate_trials, rng=self.rng,
        )
        return result.score if result.found else 0

    def _record_history(self, winner: Winner, pot: int, method: ResolutionMethod) -> None:
        self._history.append(RoundRecord(
            round_number=self._round,
            human_number=self._selected_number(Side.HUMAN),
            ai_number=self._selected_number(Side.AI),
            winner=winner,
            pot=pot,
            method=method,
        ))

    def _consume_numbers(self) -> None:
        for side, player in self._players.items():
            if player.has_number(self._selected[side]):
                player.consume_number(self._selected[side])
        self._round += 1

    def _clear_pot(self) -> None:
        self._pot = 0
        for player in self._players.values():
            player.round_bet = 0

    def _selected_number(self, side: Side) -> Optional[int]:
        player = self._players[side]
        index = self._selected[side]
        return player.numbers[index] if player.has_number(index) else None

    def _valid_cards(self) -> List[Card]:
        """The real remaining pool: every card not yet banned."""
        return Deck(banned_ids=self._banned_ids, rng=self.rng, shuffle=False).remaining_cards()

    def _true_state_for(self, agent: BaseAgent) -> Tuple[Optional[Rule], Optional[List[Card]]]:
        """Hidden state handed only to omniscient agents."""
        if agent.is_omniscient:
            return self._secret_rule, self._valid_cards()
        return None, None

    # ------------------------------------------------------------------
    # Oxygen
    # ------------------------------------------------------------------

    def decay_oxygen(self) -> Optional[DecayResult]:
        """
        Remove one chip from each player that still has chips.

        Returns:
            DecayResult, or None while no round is live (before the game,
            in RESULT, or after GAME_OVER)
        """
        if self._phase in (None, GamePhase.RESULT, GamePhase.GAME_OVER):
            return None

        human_decayed = self._players[Side.HUMAN].decay()
        ai_decayed = self._players[Side.AI].decay()

        is_game_over = any(p.chips <= 0 for p in self._players.values())
        if is_game_over:
            self._phase = GamePhase.GAME_OVER
            logger.info("Game over: out of oxygen")

        return DecayResult(human_decayed, ai_decayed, is_game_over)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def get_bet_state(self) -> Optional[BetState]:
        """Snapshot of the live round (None outside SELECT/BETTING)."""
        if self._phase not in (GamePhase.SELECT, GamePhase.BETTING):
            return None

        betting = self._phase == GamePhase.BETTING
        human = self._players[Side.HUMAN]
        ai = self._players[Side.AI]
        call_amount = self._call_amount(Side.HUMAN)

        return BetState(
            phase=self._phase,
            round_number=self._round,
            turn=self._turn,
            human_number=self._selected_number(Side.HUMAN),
            ai_number=self._selected_number(Side.AI) if betting else None,
            pot=self._pot,
            human_bet_total=human.round_bet,
            ai_bet_total=ai.round_bet,
            call_amount=call_amount,
            min_bet=call_amount,
            max_raise=calculate_max_raise(self._pot),
            ai_action=self._ai_last_action,
        )

    def get_state(self) -> Dict[str, Any]:
        """
        Get the current game state as seen by the human.

        Returns:
            Game state dictionary with public and private information
        """
        bet_state = self.get_bet_state()
        public_info = {
            "phase": self._phase.name if self._phase else "WAITING",
            "round": self._round,
            "ante": get_ante(self._round),
            "pot": self._pot,
            "turn": self._turn.value,
            "first_better": self._first_better.value,
            "difficulty": self.difficulty.value,
            "players": [p.to_dict() for p in self._players.values()],
            "ai_number": bet_state.ai_number if bet_state else None,
            "ai_action": self._ai_last_action,
            "banned_cards": sorted(self._banned_ids),
            "cards_remaining": len(self._valid_cards()),
            "history": [r.to_dict() for r in self._history],
            "numbers_exhausted": self.numbers_exhausted,
        }

        private_info = {
            "numbers": list(self._players[Side.HUMAN].numbers),
            "selected_index": self._selected[Side.HUMAN],
            "call_amount": bet_state.call_amount if bet_state else 0,
            "max_raise": bet_state.max_raise if bet_state else 0,
        }

        state = {
            "public_info": public_info,
            "private_info": private_info,
        }
        if self._phase == GamePhase.RESULT and self._last_result:
            state["last_result"] = self._last_result.to_dict()
        if self._phase == GamePhase.GAME_OVER:
            state["final_standing"] = self.final_standing().value
            rule = self.reveal_rule()
            state["secret_rule"] = rule.to_dict() if rule else None
        return state
