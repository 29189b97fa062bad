"""Image loading, sprite-sheet clipping and basic drawing."""

from typing import List, Optional, Sequence

import pygame

from .config import COLOR_KEY

ALT_COLOR_KEY = (247, 118, 122)


def make_clips(count: int, width: int, height: int) -> List[pygame.Rect]:
    """Frames laid out left to right in a single row."""
    return [pygame.Rect(i * width, 0, width, height) for i in range(count)]


def make_grid_clips(width: int, height: int, rows: int, cols: int) -> List[pygame.Rect]:
    """Frames laid out row by row in a rows x cols grid."""
    return [
        pygame.Rect(c * width, r * height, width, height)
        for r in range(rows)
        for c in range(cols)
    ]


def _load_surface(path) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


def load_texture(path) -> Optional[pygame.Surface]:
    """Load an image keyed on the alternative background colour, or None."""
    surface = _load_surface(path)
    if surface is not None:
        surface.set_colorkey(ALT_COLOR_KEY)
    return surface


def _draw(target: pygame.Surface, texture: Optional[pygame.Surface], src, dest) -> None:
    if texture is None:
        return
    image = texture
    if src is not None:
        clip = pygame.Rect(src).clip(texture.get_rect())
        if clip.width <= 0 or clip.height <= 0:
            return
        image = texture.subsurface(clip)
    dest_rect = pygame.Rect(dest) if dest is not None else target.get_rect()
    if dest_rect.width <= 0 or dest_rect.height <= 0:
        return
    if image.get_size() != dest_rect.size:
        image = pygame.transform.scale(image, dest_rect.size)
    target.blit(image, dest_rect.topleft)


class Sprite:
    """A drawable object with a texture and a destination rectangle."""

    def __init__(self) -> None:
        self.texture: Optional[pygame.Surface] = None
        self.rect = pygame.Rect(0, 0, 0, 0)

    def set_rect(self, x, y) -> None:
        self.rect.x = int(x)
        self.rect.y = int(y)

    def load_image(self, path) -> bool:
        """Load the texture keyed on the standard background colour."""
        surface = _load_surface(path)
        if surface is not None:
            surface.set_colorkey(COLOR_KEY)
            self.rect.size = surface.get_size()
        self.texture = surface
        return surface is not None

    def render(self, surface: pygame.Surface) -> None:
        _draw(surface, self.texture, None, self.rect)

    def blit(self, surface: pygame.Surface, texture, rect) -> None:
        """Draw a whole texture stretched to rect."""
        _draw(surface, texture, None, rect)

    def play_animation(
        self,
        surface: pygame.Surface,
        clips: Sequence[pygame.Rect],
        frame: int,
        dest,
        texture,
    ) -> None:
        """Draw one frame of a sprite sheet stretched to dest."""
        _draw(surface, texture, clips[frame], dest)

    def free(self) -> None:
        if self.texture is not None:
            self.texture = None
            self.rect.size = (0, 0)