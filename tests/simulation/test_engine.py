"""Tests for robots_maze.simulation.engine turn resolution."""

from __future__ import annotations

import itertools

import pytest

from robots_maze.domain.commands import Command
from robots_maze.domain.entity import (
    PLAYER_ID,
    DeathCause,
    Entity,
    EntityKind,
    MatchState,
    MatchStatus,
)
from robots_maze.domain.errors import MatchFinishedError
from robots_maze.domain.grid import Grid, Position
from robots_maze.simulation.engine import (
    TurnOutcome,
    evaluate_terminal,
    pursuit_target,
    step,
)


def make_state(
    n_rows: int,
    n_cols: int,
    player: tuple[int, int],
    robots: list[tuple[int, int]],
    fences: tuple[tuple[int, int], ...] = (),
    dead: tuple[int, ...] = (),
) -> MatchState:
    grid = Grid.with_fences(n_rows, n_cols, [Position(*cell) for cell in fences])
    robot_entities = [
        Entity(kind=EntityKind.ROBOT, position=Position(*cell), alive=i not in dead)
        for i, cell in enumerate(robots)
    ]
    return MatchState(
        grid=grid,
        player=Entity(kind=EntityKind.PLAYER, position=Position(*player)),
        robots=robot_entities,
        maze_id="01",
    )


class TestRejectedMoves:
    def test_out_of_bounds_returns_same_state(self) -> None:
        state = make_state(3, 3, player=(0, 0), robots=[(2, 2)])
        result = step(state, Command.NORTH_WEST)
        assert result.outcome is TurnOutcome.OUT_OF_BOUNDS
        assert result.state is state
        assert state.turn_count == 0

    def test_dead_robot_cell_is_occupied(self) -> None:
        state = make_state(3, 3, player=(0, 0), robots=[(1, 0), (2, 2)], dead=(0,))
        result = step(state, Command.EAST)
        assert result.outcome is TurnOutcome.CELL_OCCUPIED
        assert result.state is state
        assert state.player.position == Position(0, 0)

    def test_rejected_moves_leave_state_unchanged(self) -> None:
        state = make_state(3, 3, player=(0, 0), robots=[(1, 1), (2, 2)], dead=(0,))
        before = state.copy()
        rejected = 0
        for command in Command:
            result = step(state, command)
            if not result.outcome.accepted:
                rejected += 1
                assert result.state == before
            assert state == before
        # NW, N, NE, W, SW are off the board; SE holds the corpse
        assert rejected == 6

    def test_rejected_outcomes_have_messages(self) -> None:
        assert TurnOutcome.OUT_OF_BOUNDS.message
        assert TurnOutcome.CELL_OCCUPIED.message


class TestPlayerHazards:
    def test_walking_into_fence_kills_player_and_robots_hold(self) -> None:
        state = make_state(3, 3, player=(0, 0), robots=[(2, 2)], fences=((1, 0),))
        result = step(state, Command.EAST)
        assert result.outcome is TurnOutcome.LOST
        assert not result.state.player.alive
        assert result.state.player.death_cause is DeathCause.FENCE
        assert result.state.player.position == Position(1, 0)
        assert result.state.robots[0].position == Position(2, 2)

    def test_walking_into_live_robot_kills_player(self) -> None:
        state = make_state(4, 4, player=(0, 0), robots=[(1, 1), (3, 3)])
        result = step(state, Command.SOUTH_EAST)
        assert result.outcome is TurnOutcome.LOST
        assert result.state.player.death_cause is DeathCause.CAPTURED
        assert result.state.robots[1].position == Position(3, 3)
        assert result.events[0].entity_id == PLAYER_ID

    def test_accepted_move_does_not_mutate_input(self) -> None:
        state = make_state(4, 4, player=(0, 0), robots=[(3, 3)])
        before = state.copy()
        result = step(state, Command.EAST)
        assert result.outcome is TurnOutcome.CONTINUE
        assert state == before
        assert result.state is not state


class TestScenarios:
    def test_robot_walks_down_a_standing_player(self) -> None:
        """One diagonal step per turn closes a distance of 2 on turn 2, not turn 3."""
        state = make_state(3, 3, player=(0, 0), robots=[(2, 2)])

        first = step(state, Command.STAY)
        assert first.outcome is TurnOutcome.CONTINUE
        assert first.state.robots[0].position == Position(1, 1)

        second = step(first.state, Command.STAY)
        assert second.outcome is TurnOutcome.LOST
        assert second.state.robots[0].position == Position(0, 0)
        assert second.state.player.death_cause is DeathCause.CAPTURED
        assert second.state.turn_count == 2

        with pytest.raises(MatchFinishedError):
            step(second.state, Command.STAY)

    def test_robot_dies_on_fence_and_player_wins(self) -> None:
        state = make_state(3, 3, player=(0, 2), robots=[(2, 0)], fences=((1, 1),))
        result = step(state, Command.STAY)
        assert result.outcome is TurnOutcome.WON
        robot = result.state.robots[0]
        assert not robot.alive
        assert robot.position == Position(1, 1)
        assert robot.death_cause is DeathCause.FENCE
        assert result.state.player.alive
        assert result.state.status is MatchStatus.WON

    def test_robots_sharing_a_destination_both_die(self) -> None:
        state = make_state(3, 3, player=(2, 1), robots=[(0, 0), (0, 2)])
        result = step(state, Command.STAY)
        assert result.outcome is TurnOutcome.WON
        for robot in result.state.robots:
            assert not robot.alive
            assert robot.position == Position(1, 1)
            assert robot.death_cause is DeathCause.ROBOT_COLLISION


class TestRobotCollisions:
    def test_collision_between_last_two_robots_is_detected(self) -> None:
        state = make_state(5, 5, player=(2, 1), robots=[(4, 4), (0, 0), (0, 2)])
        result = step(state, Command.STAY)
        assert result.outcome is TurnOutcome.CONTINUE
        assert result.state.robots[0].alive
        assert result.state.robots[0].position == Position(3, 3)
        assert not result.state.robots[1].alive
        assert not result.state.robots[2].alive

    def test_resolution_does_not_depend_on_robot_order(self) -> None:
        cells = [(4, 4), (0, 0), (0, 2), (4, 0)]
        baseline = None
        for order in itertools.permutations(range(len(cells))):
            state = make_state(5, 5, player=(2, 1), robots=[cells[i] for i in order])
            result = step(state, Command.STAY)
            outcome = {
                cells[i]: (robot.position, robot.alive)
                for i, robot in zip(order, result.state.robots, strict=True)
            }
            if baseline is None:
                baseline = outcome
            assert outcome == baseline

    def test_live_robot_entering_corpse_cell_gets_stuck(self) -> None:
        state = make_state(3, 3, player=(2, 2), robots=[(1, 1), (0, 0)], dead=(0,))
        result = step(state, Command.STAY)
        assert result.outcome is TurnOutcome.WON
        corpse, mover = result.state.robots
        assert corpse.position == Position(1, 1)
        assert corpse.death_cause is None
        assert mover.position == Position(1, 1)
        assert mover.death_cause is DeathCause.ROBOT_COLLISION

    def test_robots_converging_on_fence_die_of_the_fence(self) -> None:
        state = make_state(3, 3, player=(2, 1), robots=[(0, 0), (0, 2)], fences=((1, 1),))
        result = step(state, Command.STAY)
        for robot in result.state.robots:
            assert robot.position == Position(1, 1)
            assert robot.death_cause is DeathCause.FENCE

    def test_dead_robots_never_move(self) -> None:
        state = make_state(5, 5, player=(0, 0), robots=[(3, 3), (4, 0)], dead=(0,))
        result = step(state, Command.STAY)
        assert result.state.robots[0].position == Position(3, 3)
        assert result.state.robots[1].position == Position(3, 0)

    def test_robots_dying_on_player_cell_still_kill_player(self) -> None:
        state = make_state(3, 3, player=(1, 1), robots=[(0, 0), (2, 2)])
        result = step(state, Command.STAY)
        assert all(not robot.alive for robot in result.state.robots)
        assert not result.state.player.alive
        assert result.outcome is TurnOutcome.LOST

    def test_death_events_reported(self) -> None:
        state = make_state(3, 3, player=(2, 1), robots=[(0, 0), (0, 2)])
        result = step(state, Command.STAY)
        assert {event.entity_id for event in result.events} == {0, 1}
        assert all(event.position == Position(1, 1) for event in result.events)


class TestPursuit:
    def test_distance_never_increases_on_either_axis(self) -> None:
        cells = [Position(c, r) for c in range(5) for r in range(5)]
        for robot_pos in cells:
            for player_pos in cells:
                nxt = pursuit_target(robot_pos, player_pos)
                assert abs(player_pos.col - nxt.col) <= abs(player_pos.col - robot_pos.col)
                assert abs(player_pos.row - nxt.row) <= abs(player_pos.row - robot_pos.row)
                assert max(abs(nxt.col - robot_pos.col), abs(nxt.row - robot_pos.row)) <= 1

    def test_robots_chase_post_move_position(self) -> None:
        state = make_state(5, 5, player=(2, 2), robots=[(4, 0)])
        result = step(state, Command.WEST)
        assert result.state.player.position == Position(1, 2)
        assert result.state.robots[0].position == Position(3, 1)

    def test_positions_stay_in_bounds(self) -> None:
        state = make_state(4, 6, player=(0, 3), robots=[(5, 0), (5, 3), (0, 0)])
        for command in [Command.EAST, Command.EAST, Command.NORTH, Command.STAY]:
            result = step(state, command)
            state = result.state
            for entity in [state.player, *state.robots]:
                assert state.grid.in_bounds(entity.position)
            if result.outcome in (TurnOutcome.WON, TurnOutcome.LOST):
                break


class TestTerminalCheck:
    def test_lost_takes_precedence_over_won(self) -> None:
        state = make_state(3, 3, player=(1, 1), robots=[(0, 0)], dead=(0,))
        state.player.kill(DeathCause.CAPTURED)
        assert evaluate_terminal(state) is MatchStatus.LOST

    def test_won_iff_all_robots_dead(self) -> None:
        state = make_state(3, 3, player=(1, 1), robots=[(0, 0), (2, 2)], dead=(0,))
        assert evaluate_terminal(state) is MatchStatus.AWAITING_MOVE
        state.robots[1].kill(DeathCause.FENCE)
        assert evaluate_terminal(state) is MatchStatus.WON

    def test_terminal_check_is_idempotent(self) -> None:
        state = make_state(3, 3, player=(1, 1), robots=[(0, 0)])
        first = evaluate_terminal(state)
        assert evaluate_terminal(state) is first
        assert state.status is MatchStatus.AWAITING_MOVE

    def test_maze_without_robots_is_won_on_first_move(self) -> None:
        state = make_state(2, 2, player=(0, 0), robots=[])
        result = step(state, Command.STAY)
        assert result.outcome is TurnOutcome.WON

    def test_turn_count_only_counts_accepted_moves(self) -> None:
        state = make_state(5, 5, player=(0, 0), robots=[(4, 4)])
        state = step(state, Command.NORTH).state
        assert state.turn_count == 0
        state = step(state, Command.STAY).state
        assert state.turn_count == 1
