import numpy as np
import pytest

from abalone.core import (
    CellState,
    Direction,
    GameState,
    Move,
    apply_action,
    apply_move,
    compute_returns,
    decode_action,
    encode_action,
    enumerate_legal_actions,
    initialize_game_state,
    is_valid_move,
    string_to_action,
)

P1 = CellState.PLAYER1
P2 = CellState.PLAYER2
EMPTY = CellState.EMPTY


def fresh_state(**kwargs) -> GameState:
    return initialize_game_state("empty", **kwargs)


def place(state: GameState, cells, value: CellState) -> None:
    for row, col in cells:
        state.board.set(row, col, value)


def test_sisters_follow_counterclockwise_cycle() -> None:
    assert Direction.RIGHT.forward_sister == Direction.UP_RIGHT
    assert Direction.RIGHT.backward_sister == Direction.UP_LEFT
    assert Direction.DOWN_RIGHT.forward_sister == Direction.RIGHT
    assert Direction.DOWN_RIGHT.backward_sister == Direction.UP_RIGHT


def test_two_push_one_into_empty() -> None:
    state = fresh_state()
    place(state, [(4, 2), (4, 3)], P1)
    place(state, [(4, 4)], P2)
    move = Move(Direction.RIGHT, (4, 2), (4, 3))

    assert is_valid_move(move, state)
    apply_move(move, state.board)

    assert state.board.get(4, 2) == EMPTY
    assert state.board.get(4, 3) == P1
    assert state.board.get(4, 4) == P1
    assert state.board.get(4, 5) == P2
    assert state.marble_counts() == (2, 1)


def test_two_cannot_push_two() -> None:
    state = fresh_state()
    place(state, [(4, 2), (4, 3)], P1)
    place(state, [(4, 4), (4, 5)], P2)

    assert not is_valid_move(Move(Direction.RIGHT, (4, 2), (4, 3)), state)


def test_single_marble_cannot_push() -> None:
    state = fresh_state()
    place(state, [(4, 2)], P1)
    place(state, [(4, 3)], P2)

    assert not is_valid_move(Move(Direction.RIGHT, (4, 2), (4, 3)), state)


def test_three_push_two_and_not_three() -> None:
    state = fresh_state()
    place(state, [(4, 1), (4, 2), (4, 3)], P1)
    place(state, [(4, 4), (4, 5)], P2)
    move = Move(Direction.RIGHT, (4, 1), (4, 2))
    assert is_valid_move(move, state)

    pushed = state.copy()
    apply_move(move, pushed.board)
    assert pushed.marble_counts() == (3, 2)
    assert pushed.board.get(4, 6) == P2

    state.board.set(4, 6, P2)
    assert not is_valid_move(move, state)


def test_four_in_a_row_cannot_move_inline() -> None:
    state = fresh_state()
    place(state, [(4, 1), (4, 2), (4, 3), (4, 4)], P1)

    assert not is_valid_move(Move(Direction.RIGHT, (4, 1), (4, 2)), state)
    # the front three can still step forward
    assert is_valid_move(Move(Direction.RIGHT, (4, 2), (4, 3)), state)


def test_push_blocked_by_own_marble_behind_opponent() -> None:
    state = fresh_state()
    place(state, [(4, 2), (4, 3), (4, 5)], P1)
    place(state, [(4, 4)], P2)

    assert not is_valid_move(Move(Direction.RIGHT, (4, 2), (4, 3)), state)


def test_own_line_cannot_walk_off_the_board() -> None:
    state = fresh_state()
    place(state, [(4, 7), (4, 8)], P1)

    assert not is_valid_move(Move(Direction.RIGHT, (4, 7), (4, 8)), state)


def test_push_off_grid_edge_removes_marble() -> None:
    state = fresh_state()
    place(state, [(4, 6), (4, 7)], P1)
    place(state, [(4, 8)], P2)
    move = Move(Direction.RIGHT, (4, 6), (4, 7))

    assert is_valid_move(move, state)
    apply_move(move, state.board)

    assert state.board.get(4, 7) == P1
    assert state.board.get(4, 8) == P1
    assert state.marble_counts() == (2, 0)


def test_push_into_invalid_corner_removes_marble() -> None:
    state = fresh_state()
    place(state, [(5, 5), (5, 6)], P1)
    place(state, [(5, 7)], P2)
    move = Move(Direction.RIGHT, (5, 5), (5, 6))

    assert is_valid_move(move, state)
    apply_move(move, state.board)

    assert state.board.get(5, 8) == CellState.INVALID
    assert state.board.get(5, 7) == P1
    assert state.marble_counts() == (2, 0)


def test_start_must_hold_current_players_marble() -> None:
    state = fresh_state()
    place(state, [(4, 4)], P2)
    move = Move(Direction.RIGHT, (4, 4), (4, 5))

    assert not is_valid_move(move, state)
    state.current_player = 1
    assert is_valid_move(move, state)


def test_off_grid_endpoint_rejected() -> None:
    state = fresh_state()
    place(state, [(4, 8)], P1)

    assert not is_valid_move(Move(Direction.RIGHT, (4, 8), (4, 9)), state)


def test_slide_moves_whole_line() -> None:
    state = fresh_state()
    place(state, [(4, 2), (4, 3)], P1)
    move = Move(Direction.DOWN_RIGHT, (4, 2), (4, 3))

    assert is_valid_move(move, state)
    apply_move(move, state.board)

    assert state.board.get(4, 2) == EMPTY
    assert state.board.get(4, 3) == EMPTY
    assert state.board.get(5, 2) == P1
    assert state.board.get(5, 3) == P1
    assert state.marble_counts() == (2, 0)


def test_slide_of_three() -> None:
    state = fresh_state()
    place(state, [(4, 2), (4, 3), (4, 4)], P1)
    move = Move(Direction.DOWN_LEFT, (4, 2), (4, 4))

    assert is_valid_move(move, state)
    apply_move(move, state.board)

    assert [state.board.get(5, col) for col in (1, 2, 3)] == [P1, P1, P1]
    assert state.marble_counts() == (3, 0)


@pytest.mark.parametrize("blocker", [P1, P2])
def test_slide_needs_empty_destinations(blocker) -> None:
    state = fresh_state()
    place(state, [(4, 2), (4, 3)], P1)
    state.board.set(5, 3, blocker)

    assert not is_valid_move(Move(Direction.DOWN_RIGHT, (4, 2), (4, 3)), state)


def test_slide_line_with_gap_rejected() -> None:
    state = fresh_state()
    place(state, [(4, 2), (4, 4)], P1)

    assert not is_valid_move(Move(Direction.DOWN_RIGHT, (4, 2), (4, 4)), state)


def test_slide_onto_invalid_cell_rejected() -> None:
    state = fresh_state()
    place(state, [(7, 4), (7, 5)], P1)

    assert not is_valid_move(Move(Direction.DOWN_RIGHT, (7, 4), (7, 5)), state)


def test_slide_line_must_be_straight() -> None:
    state = fresh_state()
    place(state, [(4, 2), (5, 3)], P1)

    # (1, 1) is not a hex direction
    assert not is_valid_move(Move(Direction.RIGHT, (4, 2), (5, 3)), state)


def test_classic_setup_counts_and_legal_actions() -> None:
    state = initialize_game_state("classic")
    assert state.marble_counts() == (14, 14)

    legal = enumerate_legal_actions(state)
    assert legal
    assert len(set(legal)) == len(legal)
    assert legal == sorted(legal)
    assert all(is_valid_move(decode_action(action), state) for action in legal)


def test_single_step_scenario() -> None:
    state = initialize_game_state("classic")
    state.board.set(7, 1, EMPTY)  # clear b2
    action = encode_action(Move(Direction.RIGHT, (7, 0), (7, 1)))

    next_state = apply_action(state, action)

    assert next_state.board.get(7, 0) == EMPTY
    assert next_state.board.get(7, 1) == P1
    assert next_state.current_player == 1
    assert next_state.move_count == 1
    assert not next_state.is_terminal
    # input state untouched
    assert state.board.get(7, 0) == P1


def test_classic_opening_step() -> None:
    state = initialize_game_state("classic")
    next_state = apply_action(state, string_to_action("c5c6"))

    assert next_state.board.get(6, 4) == EMPTY
    assert next_state.board.get(6, 5) == P1
    assert next_state.outcome is None
    assert next_state.current_player == 1


def test_forfeit_as_player_zero() -> None:
    state = initialize_game_state("classic")
    # b1 sits behind five own marbles
    next_state = apply_action(state, string_to_action("b1b2"))

    assert next_state.is_terminal
    assert next_state.outcome == 1
    assert compute_returns(next_state) == (-1.0, 1.0)
    assert next_state.current_player == 1
    assert next_state.move_count == 1
    assert enumerate_legal_actions(next_state) == []


def test_forfeit_as_player_one() -> None:
    state = initialize_game_state("classic")
    state = apply_action(state, string_to_action("c5c6"))
    board_before = state.board.copy()

    state = apply_action(state, 0)

    assert state.is_terminal
    assert compute_returns(state) == (1.0, -1.0)
    assert state.board == board_before


def test_forfeit_ignores_board_content() -> None:
    state = fresh_state()
    next_state = apply_action(state, 0)
    assert compute_returns(next_state) == (-1.0, 1.0)


def test_pushing_last_needed_marble_wins() -> None:
    state = fresh_state(marbles_to_win=13)
    place(state, [(4, 6), (4, 7)], P1)
    place(state, [(4, 8), (0, 4)], P2)

    next_state = apply_action(state, encode_action(Move(Direction.RIGHT, (4, 6), (4, 7))))

    assert next_state.outcome == 0
    assert next_state.is_terminal
    assert compute_returns(next_state) == (1.0, -1.0)
    assert next_state.current_player == 1


def test_shaping_returns_before_decision() -> None:
    state = initialize_game_state("classic")
    assert compute_returns(state) == (0.0, 0.0)

    state.board.set(0, 4, EMPTY)
    first, second = compute_returns(state)
    assert first == pytest.approx(0.1)
    assert second == pytest.approx(-0.1)


def test_marble_reward_is_configurable() -> None:
    state = initialize_game_state("classic", marble_reward=0.05)
    state.board.set(8, 0, EMPTY)
    state.board.set(8, 1, EMPTY)
    first, second = compute_returns(state)
    assert first == pytest.approx(-0.1)
    assert second == pytest.approx(0.1)


def test_move_limit_ends_game_without_winner() -> None:
    state = initialize_game_state("classic", max_moves=2)
    state = apply_action(state, string_to_action("c5c6"))
    state = apply_action(state, string_to_action("g5f5"))

    assert state.is_terminal
    assert state.outcome is None
    assert state.player_to_move() is None
    assert enumerate_legal_actions(state) == []
    assert compute_returns(state) == (0.0, 0.0)
    with pytest.raises(ValueError):
        apply_action(state, string_to_action("c4c5"))


def test_in_place_application_mutates_state() -> None:
    state = initialize_game_state("classic")
    result = apply_action(state, string_to_action("c5c6"), in_place=True)
    assert result is state
    assert state.move_count == 1


def test_copy_is_independent() -> None:
    state = initialize_game_state("classic")
    clone = state.copy()
    clone.board.set(6, 4, EMPTY)
    clone.current_player = 1

    assert state.board.get(6, 4) == P1
    assert state.current_player == 0
    assert clone.board.cells is not state.board.cells


def test_random_play_conserves_marbles_and_terminates() -> None:
    rng = np.random.default_rng(7)
    state = initialize_game_state("belgian_daisy", max_moves=40)
    counts = state.marble_counts()

    while not state.is_terminal:
        legal = enumerate_legal_actions(state)
        assert legal
        action = int(rng.choice(legal))
        move = decode_action(action)
        mover = state.current_player
        state = apply_action(state, action)

        new_counts = state.marble_counts()
        lost = (counts[0] - new_counts[0], counts[1] - new_counts[1])
        # only an in-line push can drop a marble, and only the opponent's
        assert lost[mover] == 0
        assert lost[1 - mover] in (0, 1)
        if lost[1 - mover]:
            assert move.is_inline
        counts = new_counts

    assert state.move_count <= 40
    assert state.outcome is None or state.outcome in (0, 1)
