"""Screen, map and gameplay constants shared across the game."""

from dataclasses import dataclass

SMALL_ENEMY_FRAME_OFFSET = 30
PLAYER_FRAME_OFFSET = 26

SCREEN_HEIGHT_MID = 320
SCREEN_WIDTH_MID = 640
SPAWN_RADIUS = 300

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 640
SCREEN_BPP = 32

COLOR_KEY = (167, 175, 180)

FRAME_PER_SECOND = 40

TILE_SIZE = 64
MAX_MAP_X = 34
MAX_MAP_Y = 10

WINDOW_TITLE = "MITKL'S SDL2 GAME"


@dataclass
class InputState:
    """Which movement keys are currently held down."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False

    def any_pressed(self) -> bool:
        """Return True if at least one direction is held."""
        return self.left or self.right or self.up or self.down

    def clear(self) -> None:
        """Release every direction."""
        self.left = self.right = self.up = self.down = False