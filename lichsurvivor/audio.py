"""Sound effects and background music."""

import os

import pygame

MAX_VOLUME = 128
SOUND_VOLUME = int(MAX_VOLUME * 0.4)
MUSIC_VOLUME = int(MAX_VOLUME * 0.3)
CHANNELS = 16

SOUND_FILES = {
    "gun": "sfx_gun_sound_effect.wav",
    "hit": "sfx_damage_hit.wav",
    "levelUp": "level_up.wav",
    "buff": "choose_buff.wav",
    "youLose": "you_lose.wav",
}
MUSIC_FILE = "8_bit_dungeon.mp3"


class AudioManager:
    """Loads the game's sounds and controls their volume.

    ``mixer`` defaults to ``pygame.mixer``; if no audio device is available
    the manager stays silent.
    """

    def __init__(self, sound_dir="sfx", mixer=None) -> None:
        if mixer is None:
            mixer = pygame.mixer
            try:
                mixer.init(44100, -16, 2, 2048)
            except pygame.error:
                mixer = None
        else:
            mixer.init(44100, -16, 2, 2048)
        self._mixer = mixer
        self._sounds = {}
        self._music_loaded = False
        self.sound_volume = SOUND_VOLUME
        self.music_volume = MUSIC_VOLUME

        if self._mixer is not None:
            self._mixer.set_num_channels(CHANNELS)
            for name, filename in SOUND_FILES.items():
                try:
                    self._sounds[name] = self._mixer.Sound(os.path.join(sound_dir, filename))
                except (pygame.error, OSError):
                    continue
            try:
                self._mixer.music.load(os.path.join(sound_dir, MUSIC_FILE))
                self._music_loaded = True
            except (pygame.error, OSError):
                self._music_loaded = False
        self._set_volumes(SOUND_VOLUME, MUSIC_VOLUME)

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _set_sound_volume(self, level: int) -> None:
        self.sound_volume = level
        for sound in self._sounds.values():
            sound.set_volume(level / MAX_VOLUME)

    def _set_music_volume(self, level: int) -> None:
        self.music_volume = level
        if self._mixer is not None:
            self._mixer.music.set_volume(level / MAX_VOLUME)

    def _set_volumes(self, sound: int, music: int) -> None:
        self._set_music_volume(music)
        self._set_sound_volume(sound)

    def play_sound(self, name: str) -> bool:
        """Play a named effect; return False if it is unknown or not loaded."""
        sound = self._sounds.get(name)
        if sound is None:
            return False
        sound.play()
        return True

    def play_music(self) -> bool:
        """Loop the background music forever."""
        if not self._music_loaded:
            return False
        self._mixer.music.play(-1)
        return True

    def toggle_mute(self, music_on: bool) -> None:
        """Silence everything when music is off, restore defaults otherwise."""
        if not music_on:
            self._set_volumes(0, 0)
        else:
            self._set_volumes(SOUND_VOLUME, MUSIC_VOLUME)

    def mute_music(self) -> None:
        self._set_music_volume(0)

    def close(self) -> None:
        """Release sounds and shut the mixer down."""
        self._sounds.clear()
        if self._mixer is not None:
            if self._music_loaded:
                self._mixer.music.stop()
                self._music_loaded = False
            self._mixer.quit()
            self._mixer = None