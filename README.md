# lichsurvivor

A small top-down arcade survival shooter built on pygame. You walk around
a tiled arena while enemies close in from all sides. Each kill drops an
experience orb. Collect enough orbs to level up, then choose one of three
random buffs. At level 3 the Lich appears. It teleports around the arena
and calls down nuke barrages on your position. While it lives, no other
enemies spawn. Stay alive as long as you can.

## Installation

```
pip install .
```

This installs pygame as a dependency.

## Playing

The game needs an asset directory that holds:

- `images/`: sprites, buttons and `back_ground.png`
- `sfx/`: sound effects and background music
- `map/`: `map01.dat` and the tile images `0.png` to `19.png`
- `Pixel Game.otf`: the font

Start the game from that directory, or point to it with `--assets`:

```
lichsurvivor
lichsurvivor --assets path/to/assets
```

The command exits with status 1 if it cannot load the font or the
background image. If no audio device is available, the game runs silently.
Missing map files leave the arena blank.

### Controls

| Input            | Action                                          |
|------------------|-------------------------------------------------|
| `W` `A` `S` `D`  | Move; two keys together move diagonally         |
| Mouse            | Aim the gun                                     |
| Left click       | Fire a burst of bullets                         |
| `Esc`            | Pause; the pause button in the top-right corner works too |

The pause menu lets you resume, quit, or turn music and sound effects on
and off. When you lose, you can replay from the start menu or quit.

### Buffs

On each level up the game pauses and offers three of these buffs:

- damage: bullets deal one more point of damage
- total bullets: one more bullet per burst
- speed: movement speed rises by 20%
- bullet speed: bullet speed rises by 10%
- max health: maximum HP rises by 10%
- healing: restores 15% of maximum HP, never past the maximum

The stats panel shows your current values. Hovering over a buff shows
what the value would become.

### Boosts

Two boost meters fill up as you play:

- **Adrenaline** charges while your bullets hit enemies or the Lich.
- **Endorphin** charges while you avoid taking damage. Being hit drains it.

A full meter gives a short bonus to damage and HP.

## Using the pieces in code

The game logic lives in separate modules:

- `lichsurvivor.collision.check_collision` tests whether two `(x, y, w, h)`
  boxes overlap. Touching edges do not count.
- `lichsurvivor.tilemap.parse_map` reads whitespace-separated tile indices
  into a `TileMap`.
- `lichsurvivor.nuke.NukeManager` spawns and advances nuke barrages.
- `lichsurvivor.timer.FrameTimer` is a pausable millisecond counter.
- `lichsurvivor.main.App` runs the game loop. Call `App.step` once per
  frame, or call `App.run` to play until the player quits.

## What it does not do

The package ships no images, sounds, map or font. You have to supply the
asset directory described above. Scores are not saved between runs.

## Running the tests

```
pip install .[test]
pytest
```