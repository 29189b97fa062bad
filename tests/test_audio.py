import os

from lichsurvivor.audio import (
    CHANNELS,
    MAX_VOLUME,
    MUSIC_VOLUME,
    SOUND_FILES,
    SOUND_VOLUME,
    AudioManager,
)


class FakeSound:
    def __init__(self, path):
        self.path = path
        self.volume = 1.0
        self.plays = 0

    def set_volume(self, value):
        self.volume = value

    def play(self):
        self.plays += 1


class FakeMusic:
    def __init__(self, fail=False):
        self.fail = fail
        self.loaded = None
        self.volume = 1.0
        self.play_calls = []
        self.stopped = False

    def load(self, path):
        if self.fail:
            raise FileNotFoundError(path)
        self.loaded = path

    def set_volume(self, value):
        self.volume = value

    def play(self, loops=0):
        self.play_calls.append(loops)

    def stop(self):
        self.stopped = True


class FakeMixer:
    def __init__(self, missing=(), music_fails=False):
        self.missing = set(missing)
        self.music = FakeMusic(music_fails)
        self.initialized = False
        self.channels = None
        self.sounds = {}

    def init(self, *args, **kwargs):
        self.initialized = True

    def quit(self):
        self.initialized = False

    def set_num_channels(self, count):
        self.channels = count

    def Sound(self, path):
        name = os.path.basename(path)
        if name in self.missing:
            raise FileNotFoundError(path)
        sound = FakeSound(path)
        self.sounds[name] = sound
        return sound


def test_initial_volumes_and_channels():
    mixer = FakeMixer()
    audio = AudioManager("sfx", mixer=mixer)
    assert mixer.initialized is True
    assert mixer.channels == CHANNELS
    assert audio.sound_volume == SOUND_VOLUME
    assert audio.music_volume == MUSIC_VOLUME
    assert mixer.music.volume == MUSIC_VOLUME / MAX_VOLUME
    assert all(s.volume == SOUND_VOLUME / MAX_VOLUME for s in mixer.sounds.values())
    assert len(mixer.sounds) == len(SOUND_FILES)


def test_play_known_and_unknown_sound():
    mixer = FakeMixer()
    audio = AudioManager("sfx", mixer=mixer)
    assert audio.play_sound("gun") is True
    assert mixer.sounds[SOUND_FILES["gun"]].plays == 1
    assert audio.play_sound("nothing") is False


def test_missing_sound_is_skipped():
    mixer = FakeMixer(missing={SOUND_FILES["hit"]})
    audio = AudioManager("sfx", mixer=mixer)
    assert audio.play_sound("hit") is False
    assert audio.play_sound("buff") is True


def test_play_music_loops_forever():
    mixer = FakeMixer()
    audio = AudioManager("sfx", mixer=mixer)
    assert audio.play_music() is True
    assert mixer.music.play_calls == [-1]


def test_play_music_without_file():
    mixer = FakeMixer(music_fails=True)
    audio = AudioManager("sfx", mixer=mixer)
    assert audio.play_music() is False
    assert mixer.music.play_calls == []


def test_toggle_mute_off_and_on():
    mixer = FakeMixer()
    audio = AudioManager("sfx", mixer=mixer)
    audio.toggle_mute(False)
    assert (audio.sound_volume, audio.music_volume) == (0, 0)
    assert mixer.music.volume == 0
    assert all(s.volume == 0 for s in mixer.sounds.values())
    audio.toggle_mute(True)
    assert (audio.sound_volume, audio.music_volume) == (SOUND_VOLUME, MUSIC_VOLUME)


def test_mute_music_keeps_effects():
    mixer = FakeMixer()
    audio = AudioManager("sfx", mixer=mixer)
    audio.mute_music()
    assert audio.music_volume == 0
    assert audio.sound_volume == SOUND_VOLUME


def test_close_shuts_down_mixer():
    mixer = FakeMixer()
    with AudioManager("sfx", mixer=mixer) as audio:
        audio.play_music()
    assert mixer.initialized is False
    assert mixer.music.stopped is True
    assert audio.play_sound("gun") is False