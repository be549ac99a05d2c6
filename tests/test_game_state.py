import dataclasses

import pytest

from agarcore.entities import Food, Pellet, Virus
from agarcore.game_state import GameConfig, GameState
from agarcore.player import Player


def _config():
    return GameConfig(100, 80, 10, 2, True)


def _player(pid, name, mass):
    player = Player(pid, name)
    player.add_cell(10, 10, mass)
    return player


def test_config_fields_and_default():
    config = _config()
    assert config.arena_width == 100
    assert config.arena_height == 80
    assert config.target_num_pellets == 10
    assert config.target_num_viruses == 2
    assert config.pellet_regen is True
    assert config.multi_channel_observation is False


def test_config_is_immutable():
    config = GameConfig(100, 80, 10, 2, True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.arena_width = 5
    assert config.arena_width == 100


def test_clear_empties_state_but_keeps_next_pid():
    state = GameState(_config())
    state.players[0] = _player(0, "A", 30)
    state.pellets.append(Pellet(1, 1))
    state.foods.append(Food(2, 2))
    state.viruses.append(Virus(3, 3))
    state.ticks = 17
    state.next_pid = 1
    state.clear()
    assert state.players == {}
    assert state.pellets == []
    assert state.foods == []
    assert state.viruses == []
    assert state.ticks == 0
    assert state.next_pid == 1


def test_leaderboard_sorted_by_mass_descending():
    state = GameState(_config())
    for pid, mass in enumerate([30, 90, 50]):
        state.players[pid] = _player(pid, f"P{pid}", mass)
    masses = [player.mass() for player in state.leaderboard()]
    assert masses == sorted(masses, reverse=True)
    assert [player.pid for player in state.leaderboard()] == [1, 2, 0]


def test_leaderboard_equal_mass_later_first():
    state = GameState(_config())
    state.players[0] = _player(0, "first", 40)
    state.players[1] = _player(1, "second", 40)
    assert [player.pid for player in state.leaderboard()] == [1, 0]


def test_format_leaderboard():
    state = GameState(_config())
    player = _player(0, "A", 30)
    player.food_eaten = 3
    state.players[0] = player
    lines = state.format_leaderboard().splitlines()
    assert lines[0].startswith("Food Eaten\t")
    assert lines[0].endswith("\tName")
    assert lines[1] == "1.\t    3\t25\t\t0\t\t0\t\tA(0)"


def test_format_leaderboard_ranks_every_player():
    state = GameState(_config())
    for pid in range(3):
        state.players[pid] = _player(pid, f"P{pid}", 30 + pid)
    lines = state.format_leaderboard().splitlines()[1:]
    assert [line.split("\t")[0] for line in lines] == ["1.", "2.", "3."]
    assert lines[0].endswith("P2(2)")