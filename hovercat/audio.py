import logging
import os

import pygame
import pygame.mixer as mixer

logger = logging.getLogger(__name__)

FLAP = 'fly'
SCORE = 'ding'
HIT = 'hit'


class SilentAudio:
    """Stands in for the mixer when no audio device is available"""

    def play_flap(self):
        pass

    def play_score(self):
        pass

    def play_hit(self):
        pass

    def stop_effects(self):
        pass

    def start_music(self):
        pass

    def stop_music(self):
        pass

    def pause_music(self):
        pass

    def resume_music(self):
        pass

    def shutdown(self):
        pass


class SoundManager(SilentAudio):
    def __init__(self, music_volume=0.15, effects_volume=0.5):
        mixer.pre_init(44100, -16, 2, 512)
        mixer.init()
        self.sounds = {}
        self.music = None
        self.music_volume = music_volume
        self.effects_volume = effects_volume

    @classmethod
    def create(cls, config):
        """Open the mixer, or fall back to silence if there is no audio device"""
        try:
            manager = cls(config.music_volume, config.effects_volume)
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)
            return SilentAudio()
        manager.load_defaults(config.asset_dir)
        return manager

    def load_defaults(self, asset_dir):
        for name in (FLAP, SCORE, HIT):
            path = os.path.join(asset_dir, f"{name}.mp3")
            if os.path.exists(path):
                self.load_sound(name, path)
            else:
                logger.info("Sound %s not found, playing without it", path)
        music_path = os.path.join(asset_dir, "music.mp3")
        if os.path.exists(music_path):
            self.load_music(music_path)

    def load_sound(self, name, path):
        sound = mixer.Sound(path)
        sound.set_volume(self.effects_volume)
        self.sounds[name] = sound

    def load_music(self, path):
        self.music = path

    def play_sound(self, name):
        if name in self.sounds:
            self.sounds[name].play()

    def play_flap(self):
        self.play_sound(FLAP)

    def play_score(self):
        self.play_sound(SCORE)

    def play_hit(self):
        self.play_sound(HIT)

    def stop_effects(self):
        for name in (FLAP, SCORE):
            if name in self.sounds:
                self.sounds[name].stop()

    def start_music(self):
        if self.music is None:
            return
        mixer.music.load(self.music)
        mixer.music.set_volume(self.music_volume)
        mixer.music.play(loops=-1)

    def stop_music(self):
        mixer.music.stop()

    def pause_music(self):
        mixer.music.pause()

    def resume_music(self):
        mixer.music.unpause()

    def shutdown(self):
        mixer.quit()
