import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT / "src"))

from gemgrid import (  # noqa: E402
    Direction,
    DuplicateStartTile,
    EmptyWorld,
    InconsistentDimensions,
    InvalidFileName,
    InvalidTile,
    NoAgents,
    NotEnoughExitTiles,
    ParseError,
    Position,
    TileKind,
    WorldState,
    parse_level,
)

TWO_AGENTS = """
S0 . G X
S1 G . X
"""


def test_parse_counts_and_initial_state():
    level = parse_level(TWO_AGENTS, file_name="levels/two_agents.txt")
    assert level.name == "two_agents"
    assert level.shape == (2, 4)
    assert level.start_positions == [Position(0, 0), Position(1, 0)]
    assert level.gem_positions == [Position(0, 2), Position(1, 1)]
    assert level.exit_positions == [Position(0, 3), Position(1, 3)]
    state = level.initial_state()
    assert len(state.agents_positions) == 2
    assert len(state.gems_collected) == 2
    assert not any(state.gems_collected)
    assert state == WorldState([(0, 0), (1, 0)], [False, False])


def test_parse_is_deterministic():
    first = parse_level(TWO_AGENTS).initial_state()
    second = parse_level(TWO_AGENTS).initial_state()
    assert first == second
    assert hash(first) == hash(second)


def test_initial_state_is_fresh_each_time():
    level = parse_level(TWO_AGENTS)
    state = level.initial_state()
    state.gems_collected = [True, True]
    assert level.initial_state().gems_collected == [False, False]


def test_agents_are_ordered_by_agent_id():
    level = parse_level("S1 . X\nS0 . X")
    assert level.start_positions == [Position(1, 0), Position(0, 0)]
    assert level.initial_state().agents_positions == [(1, 0), (0, 0)]


def test_tile_grid_and_special_tiles():
    level = parse_level("@ L0E . V\nS0 G . X")
    assert level.tile_at((0, 0)) == TileKind.WALL
    assert level.tile_at((0, 1)) == TileKind.LASER_SOURCE
    assert level.tile_at((0, 3)) == TileKind.VOID
    assert level.tile_at((1, 0)) == TileKind.START
    assert level.tile_at((1, 1)) == TileKind.GEM
    assert level.wall_positions == [Position(0, 0)]
    assert level.void_positions == [Position(0, 3)]
    source = level.laser_sources[Position(0, 1)]
    assert source.agent_id == 0
    assert source.direction == Direction.EAST
    with pytest.raises(IndexError):
        level.tile_at((2, 0))


def test_blank_lines_and_indentation_are_ignored():
    level = parse_level("\n\n    S0  X  \n\n")
    assert level.shape == (1, 2)


@pytest.mark.parametrize("text", ["", "   ", "\n\n  \n"])
def test_empty_world(text):
    with pytest.raises(EmptyWorld):
        parse_level(text)


def test_empty_world_is_checked_before_file_name():
    with pytest.raises(EmptyWorld):
        parse_level("", file_name="bad name!.toml")


@pytest.mark.parametrize("file_name", ["", "lvl.toml", "my level.txt", "levels/", "lvl!"])
def test_invalid_file_name(file_name):
    with pytest.raises(InvalidFileName) as exc_info:
        parse_level("S0 X", file_name=file_name)
    assert exc_info.value.file_name == file_name


@pytest.mark.parametrize("file_name", ["lvl1", "lvl-2.txt", "maps/level_3.txt", "<string>"])
def test_valid_file_names(file_name):
    assert parse_level("S0 X", file_name=file_name).n_agents == 1


def test_inconsistent_dimensions_reports_first_short_row():
    text = "S0 . . X\n. . . .\n. .\n. . . . ."
    with pytest.raises(InconsistentDimensions) as exc_info:
        parse_level(text)
    err = exc_info.value
    assert (err.expected_n_cols, err.actual_n_cols, err.row) == (4, 2, 2)


def test_dimensions_are_checked_before_tiles():
    with pytest.raises(InconsistentDimensions):
        parse_level("S0 ? X\n. .")


def test_invalid_tile_location():
    with pytest.raises(InvalidTile) as exc_info:
        parse_level("S0 . X\n. Z .")
    err = exc_info.value
    assert (err.tile_str, err.line, err.col) == ("Z", 1, 1)
    assert "'Z'" in str(err)


@pytest.mark.parametrize("tile_str", ["S", "Sx", "L0", "L0Q", "g", "SS0"])
def test_malformed_tokens_are_invalid(tile_str):
    with pytest.raises(InvalidTile) as exc_info:
        parse_level(f"S0 X {tile_str}")
    assert exc_info.value.tile_str == tile_str


def test_duplicate_start_tile_reports_both_positions():
    text = ". S0 . X\n. . S0 X"
    with pytest.raises(DuplicateStartTile) as exc_info:
        parse_level(text)
    err = exc_info.value
    assert err.agent_id == 0
    assert err.start1 == Position(0, 1)
    assert err.start2 == Position(1, 2)


def test_no_agents():
    with pytest.raises(NoAgents):
        parse_level(". G X")


def test_gap_in_agent_ids_is_an_invalid_tile():
    with pytest.raises(InvalidTile) as exc_info:
        parse_level(". S0 X\nS2 . X")
    assert (exc_info.value.tile_str, exc_info.value.line, exc_info.value.col) == ("S2", 1, 0)


def test_laser_of_unknown_agent_is_an_invalid_tile():
    with pytest.raises(InvalidTile) as exc_info:
        parse_level("S0 L7N X")
    assert (exc_info.value.tile_str, exc_info.value.line, exc_info.value.col) == ("L7N", 0, 1)


def test_not_enough_exit_tiles():
    with pytest.raises(NotEnoughExitTiles) as exc_info:
        parse_level("S0 S1 S2\nX . X")
    assert (exc_info.value.n_starts, exc_info.value.n_exits) == (3, 2)


def test_parse_errors_are_value_errors_with_structural_equality():
    assert issubclass(ParseError, ValueError)
    assert NotEnoughExitTiles(2, 1) == NotEnoughExitTiles(2, 1)
    assert NotEnoughExitTiles(2, 1) != NotEnoughExitTiles(2, 0)
    assert EmptyWorld() == EmptyWorld()
    assert EmptyWorld() != NoAgents()
