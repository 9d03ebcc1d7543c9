"""
High-level rules API for controlling game flow.
This module provides the public interface for game actions and legal move detection.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from fortunopoly.agents.base import Agent
from fortunopoly.exceptions import InvalidActionError
from fortunopoly.game import GameState
from fortunopoly.events import LogCategory
from fortunopoly.results import (
    ActionResult,
    ChoiceType,
    LandingAction,
    LandingResult,
    TurnPhase,
)

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Types of actions a player can take."""

    ROLL_DICE = "roll_dice"
    PAY_JAIL_BAIL = "pay_jail_bail"
    BUY_PROPERTY = "buy_property"
    DECLINE_PURCHASE = "decline_purchase"
    BUILD_HOUSE = "build_house"
    SABOTAGE_PROPERTY = "sabotage_property"
    MORTGAGE_PROPERTY = "mortgage_property"
    UNMORTGAGE_PROPERTY = "unmortgage_property"
    CHOOSE_STEAL_TARGET = "choose_steal_target"
    CHOOSE_DEMOLISH_TARGET = "choose_demolish_target"
    PROPOSE_TRADE = "propose_trade"
    ACCEPT_TRADE = "accept_trade"
    REJECT_TRADE = "reject_trade"
    END_TURN = "end_turn"


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.action_type == other.action_type and self.params == other.params


def get_legal_actions(game_state: GameState, player_id: int) -> List[Action]:
    """
    Get all legal actions available to a player.

    This is the main interface for AI/controllers to determine valid moves.

    Args:
        game_state: Current game state
        player_id: Player to get actions for

    Returns:
        List of legal Action objects
    """
    if game_state.is_over:
        return []

    player = game_state.get_player(player_id)
    if player is None or player.is_bankrupt:
        return []

    actions: List[Action] = []

    # The recipient of an open proposal may answer it out of turn
    trade = game_state.trading.active_trade
    if trade is not None and trade.to_player_id == player_id:
        actions.append(Action(ActionType.ACCEPT_TRADE))
        actions.append(Action(ActionType.REJECT_TRADE))

    if game_state.get_current_player().player_id != player_id:
        return actions

    phase = game_state.turn_phase

    if phase == TurnPhase.WAITING:
        actions.append(Action(ActionType.ROLL_DICE))
        if player.in_jail and (
            player.has_jail_free_card or player.can_afford(game_state.config.jail_bail)
        ):
            actions.append(Action(ActionType.PAY_JAIL_BAIL))
        actions.extend(_get_property_management_actions(game_state, player_id))
        return actions

    if phase == TurnPhase.BUYING:
        space = game_state.board.get_space(player.position)
        if player.can_afford(space.price):
            actions.append(Action(ActionType.BUY_PROPERTY, position=player.position))
        actions.append(Action(ActionType.DECLINE_PURCHASE, position=player.position))
        return actions

    choice = game_state.pending_choice
    if phase == TurnPhase.CARD and choice is not None:
        if choice.choice_type == ChoiceType.STEAL_TARGET:
            for target_id in choice.candidates:
                actions.append(Action(ActionType.CHOOSE_STEAL_TARGET, target_id=target_id))
        else:
            for position in choice.candidates:
                actions.append(Action(ActionType.CHOOSE_DEMOLISH_TARGET, position=position))
        return actions

    if phase == TurnPhase.END_TURN:
        actions.append(Action(ActionType.END_TURN))
        actions.extend(_get_property_management_actions(game_state, player_id))
        if player.can_afford(game_state.config.sabotage_cost):
            for position in game_state.demolition_targets(player_id):
                actions.append(Action(ActionType.SABOTAGE_PROPERTY, position=position))
        if trade is None:
            for other in game_state.get_active_players():
                if other.player_id != player_id:
                    actions.append(Action(ActionType.PROPOSE_TRADE, recipient_id=other.player_id))

    return actions


def _get_property_management_actions(game_state: GameState, player_id: int) -> List[Action]:
    """Get actions related to building and mortgaging."""
    actions: List[Action] = []
    player = game_state.get_player(player_id)
    board = game_state.board

    for position in sorted(player.properties):
        space = board.get_space(position)
        houses = game_state.get_houses(position)

        prop = board.get_property_space(position)
        if (
            prop is not None
            and houses < 5
            and player.owns_monopoly(prop.group)
            and player.can_afford(prop.house_price)
        ):
            actions.append(Action(ActionType.BUILD_HOUSE, position=position))

        if player.is_mortgaged(position):
            if player.can_afford(game_state.unmortgage_cost(position)):
                actions.append(Action(ActionType.UNMORTGAGE_PROPERTY, position=position))
            continue

        group = board.get_color_group(prop.group) if prop is not None else [position]
        if all(game_state.get_houses(pos) == 0 for pos in group):
            actions.append(Action(ActionType.MORTGAGE_PROPERTY, position=position))

    return actions


def _require(params: Dict[str, Any], key: str, action_type: ActionType) -> Any:
    value = params.get(key)
    if value is None:
        raise InvalidActionError(f"{action_type.value} needs '{key}'")
    return value


def apply_action(game_state: GameState, action: Action, player_id: Optional[int] = None) -> ActionResult:
    """
    Apply an action to the game state.

    This is the main interface for executing moves. Rule failures and
    malformed actions come back as a failed ActionResult.

    Args:
        game_state: Current game state
        action: Action to apply
        player_id: Player executing the action (optional, defaults to current player)

    Returns:
        ActionResult with the failure reason, if any
    """
    if player_id is None:
        player_id = game_state.get_current_player().player_id

    try:
        return _dispatch(game_state, action, player_id)
    except InvalidActionError as e:
        logger.warning(f"Rejected action {action!r} from player {player_id}: {e}")
        return ActionResult.fail(str(e))


def _dispatch(game_state: GameState, action: Action, player_id: int) -> ActionResult:
    if game_state.is_over:
        return ActionResult.fail("Game is over")

    player = game_state.get_player(player_id)
    if player is None:
        raise InvalidActionError(f"Unknown player {player_id}")

    action_type = action.action_type
    params = action.params

    # Trade answers are the one thing allowed out of turn
    if action_type in (ActionType.ACCEPT_TRADE, ActionType.REJECT_TRADE):
        trade = game_state.trading.active_trade
        if trade is None or trade.to_player_id != player_id:
            return ActionResult.fail("No trade offered to this player")
        if action_type == ActionType.ACCEPT_TRADE:
            return game_state.trading.execute()
        game_state.trading.cancel()
        game_state.add_log(f"{player.name} declined the trade", LogCategory.TRADE)
        return ActionResult.ok()

    if game_state.get_current_player().player_id != player_id:
        return ActionResult.fail("Not your turn")
    phase = game_state.turn_phase

    # A player bankrupted mid-turn can still hand the turn on
    if action_type == ActionType.END_TURN:
        if phase != TurnPhase.END_TURN and not player.is_bankrupt:
            return ActionResult.fail("Turn is not finished")
        game_state.end_turn()
        return ActionResult.ok()

    if player.is_bankrupt:
        return ActionResult.fail("Player is bankrupt")

    if action_type == ActionType.ROLL_DICE:
        if phase != TurnPhase.WAITING:
            return ActionResult.fail("Cannot roll now")
        _roll_and_move(game_state, player_id)
        return ActionResult.ok()

    elif action_type == ActionType.PAY_JAIL_BAIL:
        if phase != TurnPhase.WAITING:
            return ActionResult.fail("Cannot pay bail now")
        if game_state.pay_jail_bail(player_id):
            return ActionResult.ok()
        return ActionResult.fail("Cannot pay bail")

    elif action_type in (ActionType.BUY_PROPERTY, ActionType.DECLINE_PURCHASE):
        if phase != TurnPhase.BUYING:
            return ActionResult.fail("Nothing to buy")
        # Only the tile just landed on is for sale
        position = player.position
        if params.get("position", position) != position:
            return ActionResult.fail("You can only buy the tile you landed on")
        if action_type == ActionType.BUY_PROPERTY:
            if not game_state.buy_property(player_id, position):
                return ActionResult.fail("Cannot buy this property")
        elif not game_state.decline_purchase(player_id, position):
            return ActionResult.fail("Cannot decline now")
        _after_landing(game_state, player_id)
        return ActionResult.ok()

    elif action_type == ActionType.BUILD_HOUSE:
        position = _require(params, "position", action_type)
        if game_state.build_house(player_id, position):
            return ActionResult.ok()
        return ActionResult.fail("Cannot build here")

    elif action_type == ActionType.SABOTAGE_PROPERTY:
        position = _require(params, "position", action_type)
        if game_state.sabotage_property(player_id, position):
            return ActionResult.ok()
        return ActionResult.fail("Cannot sabotage this property")

    elif action_type == ActionType.MORTGAGE_PROPERTY:
        return game_state.mortgage_property(player_id, _require(params, "position", action_type))

    elif action_type == ActionType.UNMORTGAGE_PROPERTY:
        return game_state.unmortgage_property(player_id, _require(params, "position", action_type))

    elif action_type in (ActionType.CHOOSE_STEAL_TARGET, ActionType.CHOOSE_DEMOLISH_TARGET):
        if action_type == ActionType.CHOOSE_STEAL_TARGET:
            result = game_state.resolve_steal_choice(
                player_id, _require(params, "target_id", action_type)
            )
        else:
            result = game_state.resolve_demolish_choice(
                player_id, _require(params, "position", action_type)
            )
        if result:
            _after_landing(game_state, player_id)
        return result

    elif action_type == ActionType.PROPOSE_TRADE:
        return _propose_trade(game_state, player_id, params)

    raise InvalidActionError(f"Unknown action {action_type!r}")


def _propose_trade(game_state: GameState, player_id: int, params: Dict[str, Any]) -> ActionResult:
    trading = game_state.trading
    recipient_id = _require(params, "recipient_id", ActionType.PROPOSE_TRADE)

    trading.create_proposal(player_id, recipient_id)
    for position in params.get("offered_properties", []):
        trading.add_offered_property(position)
    for position in params.get("requested_properties", []):
        trading.add_requested_property(position)
    trading.set_offered_money(params.get("offered_money", 0))
    trading.set_requested_money(params.get("requested_money", 0))

    validation = trading.validate()
    if not validation:
        trading.cancel()
        return ActionResult.fail(validation.reason)
    return ActionResult.ok()


def _roll_and_move(game_state: GameState, player_id: int) -> None:
    player = game_state.get_player(player_id)

    if player.in_jail:
        roll = game_state.roll_dice()
        jail = game_state.process_jail_turn(player_id, roll)
        if not jail.can_move:
            game_state.finish_turn_actions()
            return
    else:
        roll = game_state.roll_dice()
        if roll.sent_to_jail:
            game_state.finish_turn_actions()
            return

    game_state.move_player(player_id, roll.total)
    _resolve_landing(game_state, player_id)


def _resolve_landing(game_state: GameState, player_id: int) -> LandingResult:
    """
    Resolve the tile under the player, following card moves to new tiles.

    Rent and card effects are applied automatically. Purchases and card
    choices leave the turn waiting for the player.
    """
    player = game_state.get_player(player_id)

    while True:
        result = game_state.process_landing(player_id)

        if result.action == LandingAction.PAY_RENT:
            game_state.pay_rent(player_id, result.owner_id, result.rent)

        elif result.action == LandingAction.CHANCE_CARD:
            game_state.add_log(f'"{result.card.text}"', LogCategory.CARD)
            card_result = game_state.apply_card_effect(player_id, result.card)
            if card_result.needs_choice:
                return result
            if card_result.needs_landing and not player.is_bankrupt:
                continue

        elif result.action == LandingAction.CAN_BUY:
            return result

        _after_landing(game_state, player_id)
        return result


def _after_landing(game_state: GameState, player_id: int) -> None:
    """Grant another roll after doubles, otherwise close the turn's dice phase."""
    player = game_state.get_player(player_id)
    rolled_doubles = game_state.consecutive_doubles > 0
    if rolled_doubles and not player.in_jail and not player.is_bankrupt and not game_state.is_over:
        game_state.grant_extra_roll()
    else:
        game_state.finish_turn_actions()


def play_bot_turn(game_state: GameState, agent: Agent, max_steps: int = 50) -> List[Action]:
    """
    Play one full turn for an agent-controlled player.

    The agent only answers questions; every state change goes through
    apply_action or the engine's own entry points.

    Returns:
        List of actions that were taken
    """
    actions_taken: List[Action] = []
    player = game_state.get_player(agent.player_id)

    if game_state.is_over or game_state.get_current_player().player_id != agent.player_id:
        return actions_taken

    def act(action: Action) -> ActionResult:
        result = apply_action(game_state, action, agent.player_id)
        actions_taken.append(action)
        if not result:
            logger.debug(f"{agent.name}: {action!r} failed: {result.reason}")
        return result

    if player.in_jail and game_state.turn_phase == TurnPhase.WAITING and agent.should_pay_bail(game_state):
        act(Action(ActionType.PAY_JAIL_BAIL))

    for _ in range(max_steps):
        if game_state.is_over or player.is_bankrupt:
            break
        phase = game_state.turn_phase

        if phase == TurnPhase.WAITING:
            act(Action(ActionType.ROLL_DICE))

        elif phase == TurnPhase.BUYING:
            position = player.position
            if agent.should_buy(game_state, position):
                if not act(Action(ActionType.BUY_PROPERTY, position=position)):
                    act(Action(ActionType.DECLINE_PURCHASE, position=position))
            else:
                act(Action(ActionType.DECLINE_PURCHASE, position=position))

        elif phase == TurnPhase.CARD and game_state.pending_choice is not None:
            choice = game_state.pending_choice
            if choice.choice_type == ChoiceType.STEAL_TARGET:
                target = agent.choose_steal_target(game_state, choice.candidates)
                action = Action(ActionType.CHOOSE_STEAL_TARGET, target_id=target)
            else:
                target = agent.choose_demolish_target(game_state, choice.candidates)
                action = Action(ActionType.CHOOSE_DEMOLISH_TARGET, position=target)
            if target is None or not act(action):
                game_state.pending_choice = None
                _after_landing(game_state, agent.player_id)

        else:
            break

    if game_state.is_over:
        return actions_taken

    if not player.is_bankrupt:
        target = agent.consider_sabotage(game_state)
        if target is not None:
            act(Action(ActionType.SABOTAGE_PROPERTY, position=target))
        agent.try_build_houses(game_state)

    if game_state.turn_phase != TurnPhase.END_TURN:
        game_state.finish_turn_actions()
    act(Action(ActionType.END_TURN))
    return actions_taken


def offer_trade(game_state: GameState, agent: Agent) -> ActionResult:
    """Let an agent answer the proposal addressed to it."""
    trade = game_state.trading.active_trade
    if trade is None:
        return ActionResult.fail("No active trade")
    if trade.to_player_id != agent.player_id:
        return ActionResult.fail("Trade is not addressed to this player")

    if agent.evaluate_trade(game_state, trade):
        return apply_action(game_state, Action(ActionType.ACCEPT_TRADE), agent.player_id)

    apply_action(game_state, Action(ActionType.REJECT_TRADE), agent.player_id)
    return ActionResult.fail("Trade declined")


def run_bot_game(game_state: GameState, agents: List[Agent], max_rounds: int = 50) -> None:
    """
    Play agent turns until the game ends or the round cap is reached.

    Hitting the cap ends the game, and the winner is then decided on net worth.
    """
    by_id = {agent.player_id: agent for agent in agents}

    while not game_state.is_over:
        if game_state.round > max_rounds:
            game_state.add_log(f"Round limit of {max_rounds} reached")
            game_state.end_game()
            break

        current = game_state.get_current_player()
        agent = by_id.get(current.player_id)
        if agent is None:
            raise InvalidActionError(f"No agent seated for player {current.player_id}")
        play_bot_turn(game_state, agent)
