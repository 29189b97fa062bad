"""Tile map loading and drawing."""

import os
from dataclasses import dataclass, field
from itertools import islice
from typing import List, Optional

import pygame

from .config import MAX_MAP_X, MAX_MAP_Y, SCREEN_HEIGHT, SCREEN_WIDTH, TILE_SIZE
from .sprite import Sprite

TILE_KINDS = 20


def _empty_grid() -> List[List[int]]:
    return [[0] * MAX_MAP_X for _ in range(MAX_MAP_Y)]


@dataclass
class TileMap:
    """A grid of tile indices and the pixel extent of its used area."""

    start_x: int = 0
    start_y: int = 0
    max_x: int = 0
    max_y: int = 0
    tiles: List[List[int]] = field(default_factory=_empty_grid)
    file_name: Optional[str] = None


def _integers(text: str):
    for token in text.split():
        try:
            yield int(token)
        except ValueError:
            return


def parse_map(text: str) -> TileMap:
    """Read whitespace-separated tile indices row by row; missing cells stay 0."""
    tiles = _empty_grid()
    last_row = 0
    last_col = 0
    for position, value in enumerate(islice(_integers(text), MAX_MAP_X * MAX_MAP_Y)):
        row, col = divmod(position, MAX_MAP_X)
        tiles[row][col] = value
        if value > 0:
            last_col = max(last_col, col)
            last_row = max(last_row, row)
    return TileMap(
        max_x=(last_col + 1) * TILE_SIZE,
        max_y=(last_row + 1) * TILE_SIZE,
        tiles=tiles,
    )


class GameMap:
    """The background tile map and the tile images it draws with."""

    def __init__(self) -> None:
        self.map = TileMap()
        self.tiles = [Sprite() for _ in range(TILE_KINDS)]

    def load_map(self, path) -> bool:
        """Load a map file; leave the current map untouched if it can't be read."""
        try:
            with open(path, "r", encoding="ascii", errors="ignore") as handle:
                text = handle.read()
        except OSError:
            return False
        self.map = parse_map(text)
        self.map.file_name = str(path)
        return True

    def load_tiles(self, directory) -> int:
        """Load the tile images ``0.png`` .. ``19.png``; return how many exist."""
        loaded = 0
        for index, tile in enumerate(self.tiles):
            path = os.path.join(str(directory), f"{index}.png")
            if not os.path.isfile(path):
                continue
            if tile.load_image(path):
                loaded += 1
        return loaded

    def draw(self, surface: pygame.Surface) -> None:
        game_map = self.map
        x1 = -(game_map.start_x % TILE_SIZE)
        x2 = x1 + SCREEN_WIDTH + (0 if x1 == 0 else TILE_SIZE)
        y1 = -(game_map.start_y % TILE_SIZE)
        y2 = y1 + SCREEN_HEIGHT + (0 if y1 == 0 else TILE_SIZE)

        first_col = game_map.start_x // TILE_SIZE
        first_row = game_map.start_y // TILE_SIZE
        for map_y, y in enumerate(range(y1, y2, TILE_SIZE), start=first_row):
            if map_y >= MAX_MAP_Y:
                break
            row = game_map.tiles[map_y]
            for map_x, x in enumerate(range(x1, x2, TILE_SIZE), start=first_col):
                if map_x >= MAX_MAP_X:
                    break
                value = row[map_x]
                if 0 < value < TILE_KINDS:
                    tile = self.tiles[value]
                    tile.set_rect(x, y)
                    tile.render(surface)