import pytest

from darnitkit.sounds import CallbackSound, PreloadedSound


SAMPLES = bytes(range(40))


def test_preloaded_decode_within_buffer():
    sound = PreloadedSound(SAMPLES, 2)
    assert sound.decode(8, 4) == SAMPLES[4:12]


def test_preloaded_decode_stops_at_end():
    sound = PreloadedSound(SAMPLES, 1)
    out = sound.decode(100, 30)
    assert out == SAMPLES[30:]
    assert len(out) == len(SAMPLES) - 30


def test_preloaded_decode_at_or_past_end_is_empty():
    sound = PreloadedSound(SAMPLES, 1)
    assert sound.decode(16, len(SAMPLES)) == b""
    assert sound.decode(16, len(SAMPLES) + 10) == b""


def test_preloaded_sequential_decode_reassembles_data():
    sound = PreloadedSound(SAMPLES, 2)
    pieces = []
    pos = 0
    while True:
        chunk = sound.decode(7, pos)
        if not chunk:
            break
        pieces.append(chunk)
        pos += len(chunk)
    assert b"".join(pieces) == SAMPLES
    assert pos == sound.size


def test_preloaded_play_shares_handle_and_counts_usage():
    sound = PreloadedSound(SAMPLES, 2)
    assert sound.usage == 0
    first = sound.play()
    second = sound.play()
    assert first is sound
    assert second is sound
    assert sound.usage == 2


def test_preloaded_keeps_channels_and_size():
    sound = PreloadedSound(bytearray(SAMPLES), 1)
    assert sound.channels == 1
    assert sound.size == len(SAMPLES)
    assert sound.data == SAMPLES


def test_preloaded_rejects_negative_arguments():
    sound = PreloadedSound(SAMPLES, 2)
    with pytest.raises(ValueError):
        sound.decode(-1, 0)
    with pytest.raises(ValueError):
        sound.decode(4, -1)
    with pytest.raises(ValueError):
        PreloadedSound(SAMPLES, -1)


def test_callback_receives_length_position_and_data():
    calls = []

    def produce(length, pos, data):
        calls.append((length, pos, data))
        return b"\x01" * length

    token_data = object()
    sound = CallbackSound(produce, 2, token_data)
    out = sound.play().decode(6, 12)
    assert out == b"\x01" * 6
    assert calls == [(6, 12, token_data)]


def test_callback_play_returns_new_handle_sharing_state():
    def produce(length, pos, data):
        return b""

    sound = CallbackSound(produce, 1, "state")
    handle = sound.play()
    assert handle is not sound
    assert handle.callback is produce
    assert handle.channels == 1
    assert handle.data == "state"


def test_callback_output_is_cut_to_length():
    sound = CallbackSound(lambda length, pos, data: SAMPLES, 2)
    assert sound.decode(5, 0) == SAMPLES[:5]


def test_callback_returning_none_gives_empty():
    sound = CallbackSound(lambda length, pos, data: None, 2)
    assert sound.decode(10, 0) == b""


def test_callback_must_be_callable():
    with pytest.raises(TypeError):
        CallbackSound("not callable", 2)


def test_callback_rejects_negative_length():
    sound = CallbackSound(lambda length, pos, data: b"", 2)
    with pytest.raises(ValueError):
        sound.decode(-4, 0)