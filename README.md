# darnitkit

Small building blocks for 2D games, using only the standard library.

## Modules

- `darnitkit.bitwise`: `round_up_to_pow2(val)` gives the smallest power
  of two not below `val` (0 when it would not fit in 32 bits), and
  `get_power(val)` gives that power's exponent.
- `darnitkit.collision`: `circles_separate(x1, y1, x2, y2, r1, r2)` is
  True when two circles do not touch. Circles whose edges just meet
  count as touching.
- `darnitkit.bbox`: `BBoxList` holds axis-aligned boxes under integer
  keys. Boxes are added, moved, resized and deleted by key, and
  `test(x, y, w, h, limit)` returns the keys of the boxes overlapping a
  rectangle. Boxes are kept sorted along X or Y (`SortMode`, chosen with
  `set_sortmode`). Keys count up from the initial size, or after
  `use_index_keys()` they are the slot a box occupies.
- `darnitkit.compression`: `compress(data)` gives a big-endian 32-bit
  length followed by a level-9 bzip2 stream, and `decompress` reverses it.
  Damaged or short input raises `CompressionError`.
- `darnitkit.gamefile`: `GameFile` wraps a binary file object, optionally
  as a window (`offset`, `size`) into a larger file, with its own
  position. It reads and writes bytes, big-endian 32-bit integers
  (`read_ints`, `write_ints`), lines (`gets`, `get_line`) and embedded
  bzip2 streams (`read_compressed`, `write_compressed`). Seeking outside
  the file raises `ValueError`. It is a context manager. A file marked
  `temporary` is deleted when it is closed.
- `darnitkit.sounds`: `PreloadedSound` keeps decoded signed 16-bit
  little-endian samples in memory. `CallbackSound` asks a function
  `callback(length, pos, data)` for samples on demand.
- `darnitkit.mixer`: `Mixer` plays up to 16 sounds at once (`CHANNELS`).
  Each sound has a left and a right volume, where 128 is full volume.
  `mix(frames)` returns interleaved stereo 16-bit samples and
  `mix_bytes(frames)` returns them packed. An optional compressor
  (`enable_compression`, `disable_compression`) scales down a mix that
  would clip, and `set_master_volume` is clamped to 0..128. A playback
  stops by itself once its sound runs out. `sample_mix` and `frame_mix`
  mix individual samples.
- `darnitkit.imgload`: `downsample(pixels, target_format)` converts
  32-bit RGBA pixels to 16-bit `PixelFormat.RGBA4` or `PixelFormat.RGB5A1`.
  Any other format leaves the pixels unchanged.

## Examples

```python
from darnitkit.bbox import BBoxList
from darnitkit.collision import circles_separate

boxes = BBoxList(16)
player = boxes.add(10, 10, 8, 8)     # key 16
wall = boxes.add(14, 0, 4, 40)       # key 17
print(boxes.test(0, 0, 20, 20, 16))  # [16, 17]

print(circles_separate(0, 0, 10, 0, 3, 3))  # True: the circles do not touch
```

```python
from darnitkit.compression import compress, decompress

packed = compress(b"level data" * 100)
assert decompress(packed) == b"level data" * 100
```

```python
import struct
from darnitkit.mixer import Mixer
from darnitkit.sounds import PreloadedSound

sound = PreloadedSound(struct.pack("<4h", 1000, -1000, 2000, -2000), channels=1)
mixer = Mixer()
key = mixer.play(sound, 128, 128)
print(mixer.mix(4))  # [1000, 1000, -1000, -1000, 2000, 2000, -2000, -2000]
mixer.mix(4)         # nothing left to decode, so the playback ends
print(mixer.is_playing(key))  # False
```

## What it does not do

- It has no search path for game files, no mounting of packed data
  images and no directory listing. `GameFile` works on file objects that
  you open yourself.
- It has no input handling.
- It does not decode audio formats such as Ogg Vorbis or tracker music,
  and it does not play to a sound device. The mixer only returns samples.
- It does not load image files. `downsample` works on pixel values that
  you supply.

## Installing and testing

Install with `pip install .`. To run the tests, install with
`pip install .[test]` and then run `pytest`.