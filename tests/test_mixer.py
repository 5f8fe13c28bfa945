import struct

import pytest

from darnitkit.mixer import CHANNELS, Mixer, frame_mix, sample_mix
from darnitkit.sounds import CallbackSound, PreloadedSound


def pcm(samples):
    return struct.pack("<%dh" % len(samples), *samples)


def test_sample_mix_with_silence_keeps_sample():
    assert sample_mix(1234, 0) == 1234
    assert sample_mix(0, -1234) == -1234
    assert sample_mix(0, 0) == 0


def test_sample_mix_is_symmetric_and_softened():
    for a, b in [(1000, 1000), (-20000, 15000), (30000, 30000)]:
        assert sample_mix(a, b) == sample_mix(b, a)
    assert abs(sample_mix(1000, 1000)) <= 2000


def test_frame_mix_matches_sample_mix_and_checks_length():
    left = [100, -200, 300]
    right = [0, 0, 0]
    assert frame_mix(left, right) == left
    with pytest.raises(ValueError):
        frame_mix([1, 2], [1])


def test_keys_increment_and_stop():
    mixer = Mixer()
    sound = PreloadedSound(pcm([0] * 8), 2)
    k1 = mixer.play(sound, 128, 128)
    k2 = mixer.play(sound, 128, 128)
    assert (k1, k2) == (0, 1)
    assert mixer.is_playing(k1)
    mixer.stop(k1)
    assert not mixer.is_playing(k1)
    assert mixer.is_playing(k2)
    mixer.stop_all()
    assert not mixer.is_playing(k2)


def test_all_channels_busy_raises():
    mixer = Mixer()
    sound = PreloadedSound(pcm([0] * 8), 2)
    keys = [mixer.play(sound, 128, 128) for _ in range(CHANNELS)]
    assert len(set(keys)) == CHANNELS
    with pytest.raises(RuntimeError):
        mixer.play(sound, 128, 128)


def test_silence_when_nothing_plays():
    assert Mixer().mix(16) == [0] * 32


def test_stereo_full_volume_passes_through():
    samples = [100, -100, 2000, -3000, 5, 6, 7, 8]
    mixer = Mixer()
    mixer.play(PreloadedSound(pcm(samples), 2), 128, 128)
    assert mixer.mix(4) == samples


def test_mono_is_spread_to_both_sides():
    samples = [10, -20, 30, 40]
    mixer = Mixer()
    mixer.play(PreloadedSound(pcm(samples), 1), 128, 128)
    out = mixer.mix(4)
    assert out[0::2] == samples
    assert out[1::2] == samples


def test_volume_and_set_volume():
    samples = [1000, 2000, 4000, 800] * 4
    mixer = Mixer()
    key = mixer.play(PreloadedSound(pcm(samples), 2), 128, 0)
    out = mixer.mix(2)
    assert out[0::2] == samples[0:4:2]
    assert out[1::2] == [0, 0]
    mixer.set_volume(key, 0, 128)
    out = mixer.mix(2)
    assert out[0::2] == [0, 0]
    assert out[1::2] == samples[5:8:2]


def test_playback_advances_and_ends():
    samples = list(range(1, 17))
    mixer = Mixer()
    key = mixer.play(PreloadedSound(pcm(samples), 2), 128, 128)
    assert mixer.mix(4) == samples[:8]
    assert mixer.mix(4) == samples[8:]
    assert mixer.is_playing(key)
    assert mixer.mix(4) == [0] * 8
    assert not mixer.is_playing(key)


def test_master_volume_clamped_and_applied():
    mixer = Mixer()
    mixer.set_master_volume(500)
    assert mixer.master_volume == 128
    mixer.set_master_volume(-5)
    assert mixer.master_volume == 0
    mixer.play(PreloadedSound(pcm([1000] * 8), 2), 128, 128)
    assert mixer.mix(4) == [0] * 8


def test_compression_keeps_loud_mix_in_range():
    loud = PreloadedSound(pcm([30000] * 8), 2)
    mixer = Mixer()
    mixer.play(loud, 128, 128)
    mixer.play(loud, 128, 128)
    out = mixer.mix(4)
    assert all(0 < s <= 32767 for s in out)
    assert mixer.compression > 1


def test_without_compression_loud_mix_wraps():
    loud = PreloadedSound(pcm([30000] * 8), 2)
    mixer = Mixer()
    mixer.disable_compression()
    mixer.play(loud, 128, 128)
    mixer.play(loud, 128, 128)
    out = mixer.mix(4)
    assert all(s < 0 for s in out)
    assert mixer.compression == 1


def test_callback_sound_receives_positions():
    seen = []

    def produce(length, pos, data):
        seen.append((length, pos, data))
        return pcm([7] * (length // 2))

    mixer = Mixer()
    mixer.play(CallbackSound(produce, 2, "tag"), 128, 128)
    assert mixer.mix(2) == [7, 7, 7, 7]
    mixer.mix(2)
    assert seen == [(8, 0, "tag"), (8, 8, "tag")]


def test_mix_bytes_packs_samples():
    mixer = Mixer()
    mixer.play(PreloadedSound(pcm([1, -1, 2, -2]), 2), 128, 128)
    assert mixer.mix_bytes(2) == pcm([1, -1, 2, -2])


def test_play_none_and_negative_frames_rejected():
    mixer = Mixer()
    with pytest.raises(ValueError):
        mixer.play(None, 128, 128)
    with pytest.raises(ValueError):
        mixer.mix(-1)