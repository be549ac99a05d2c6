# agarcore

A headless game engine for Agar.io-style simulations. It models pellets,
foods, viruses and player cells in a rectangular arena, with movement,
eating, splitting, virus popping, recombining, mass decay and anti-teaming,
all advanced in discrete ticks. The engine is meant to be driven from code,
for example as the core of a learning environment.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from agarcore.engine import Engine
from agarcore.player import Player
from agarcore.geometry import Action

engine = Engine()          # default 350 x 350 arena
engine.reset()             # scatter pellets and viruses
engine.seed(42)

pid = engine.add_player(Player, "agent")
agent = engine.player(pid)

for _ in range(600):
    agent.target = engine.random_location()
    agent.action = Action.NONE
    engine.tick(1 / 60)

print(engine.ticks(), agent.mass(), engine.pellet_count())
print(engine.state.format_leaderboard())
```

`tick` accepts the elapsed time either as a number of seconds or as a
`datetime.timedelta`.

### Main pieces

- `agarcore.engine.Engine`: owns the `GameState` and advances it with
  `tick(elapsed_seconds)`. `reset()` clears the arena and repopulates it;
  `reset_state()` also restarts player ids and reseeds the random generator;
  `add_player(player_cls, name)` spawns a player and returns its id;
  `player(pid)` looks one up and raises `EngineError` for unknown ids;
  `seed(s)` makes pellet, virus and spawn placement repeatable.
  The engine takes arena width and height, pellet and virus counts, a
  pellet-regeneration flag and a game mode number (0 to 10); unknown modes
  raise `EngineError`. Modes choose whether mass decays, whether pellets are
  laid out along a square or scattered at random, whether pellets and
  viruses regenerate, and the starting mass of a player.
- `agarcore.player.Player`: a set of cells with a target location and an
  `Action` (`NONE`, `FEED`, `SPLIT`). Subclass it and override
  `take_action(state)` to write a bot; the engine calls it every ten ticks.
- `agarcore.entities`: `Pellet`, `Food`, `Virus` and `Cell`, all built on
  `Ball` and `MovingBall`.
- `agarcore.geometry`: `Coordinate`, `Velocity`, `Action`, `clamp`,
  `div_round_up` and the mass/radius conversions `radius_conversion` and
  `mass_conversion`.
- `agarcore.physics`: speed limits (`max_speed`, `split_speed`), arena
  boundaries and the collisions between one player's own cells.
- `agarcore.mechanics`: splitting, virus popping, recombining, eating,
  feeding, virus feeding, anti-teaming and mass decay.
- `agarcore.game_state`: `GameConfig` and `GameState`, including
  `leaderboard()` and `format_leaderboard()`.
- `agarcore.colors`: the `Color` enum with `rgb()`, and `random_color`.
- `agarcore.settings`: the tuning constants.

## What this package does not do

- It draws nothing: there is no window, no off-screen image and no
  pixel observation. Colours are kept on players only as data.
- It ships no ready-made bots; write your own by subclassing `Player`.
- It has no command-line program and cannot save a game or load one from
  a file.