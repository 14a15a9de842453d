# chifkit

Core building blocks for a small game engine, in pure Python with numpy.

## Modules

- `chifkit.version`: the engine version, from `get_major()`, `get_minor()`,
  `get_revision()` and `get_version_string()` (`"0.15.10"`).
- `chifkit.backlog`: a thread-safe in-memory log.
  - `log(source, msg, level=LogLevel.INFO)` records a `LogEntry` and prints
    it as `[LEVEL::source] msg`.
  - `LogLevel` has `INFO`, `DEBUG`, `WARNING` and `ERR`;
    `log_level_to_string()` gives `"INFO"`, `"DEBUG"`, `"WARNING"` and
    `"ERROR"`.
  - `entries()` returns a copy of the recorded entries, oldest first, and
    `clear()` forgets them.
  - `save_logs(filename="CHIFEngine.log")` appends every recorded entry to the
    file. If the file cannot be opened, it logs an `ERR` entry from source
    `Backlog` and does not raise.
- `chifkit.debugger`: inline breakpoints that write `DEBUG` entries to the
  backlog.
  - `enable_debugging(state)` and `enable_engine_debugging(state)` switch the
    two kinds on and off. `is_debugging_enabled()` and
    `is_engine_debugging_enabled()` report the current state.
  - `breakpoint(file, line, in_engine=False)` logs
    `"[Source::InEngine] Breakpoint hit at line N"` when `in_engine` is true
    and engine debugging is on. Otherwise it logs
    `"Breakpoint hit at line N"` if user debugging is on.
- `chifkit.jobsystem`: background worker threads fed through a bounded queue.
  - `RingBuffer(capacity=256)` is a thread-safe FIFO that holds at most
    `capacity - 1` items. `push_back()` returns `False` when it is full, and
    `pop_front()` raises `IndexError` when it is empty.
  - `JobSystem(capacity=256)` starts daemon workers with
    `initialize(num_threads=None)`. The default is one worker per CPU.
  - `execute(job)` queues a callable.
  - `dispatch(job_count, group_size, job)` splits the indices into groups and
    calls `job` with a `JobDispatchArgs(job_index, group_index)` for each one.
  - `is_busy()` reports unfinished work. `wait()` blocks until all queued work
    is done, then re-raises the first exception any job raised.
  - Queuing before `initialize()` raises `RuntimeError`.
- `chifkit.atlas`: builds a `FontAtlas` from rendered `Glyph` bitmaps.
  - It covers character codes 32 to 127, placed in a single row with 2 pixels
    of padding after each glyph.
  - Glyphs come from a mapping of code to `Glyph`, or from a callable
    `(code, pixel_size)` that returns a glyph or `None`.
  - Glyphs that cannot be loaded are logged as errors and left out.
  - `texture` is a `uint8` numpy array of shape `(height, width)`.
  - `char_info(code)` returns the `Character` metrics for a code or a
    one-character string. Codes outside 0 to 127 raise `ValueError`.
  - `Glyph` advances are given in 26.6 fixed point.
- `chifkit.textlayout`: text measurement and wrapping against an atlas.
  - `split_text(text)` splits at spaces and keeps each space on the word
    before it.
  - `calc_width(text, atlas)` sums the horizontal advances.
  - `wrap_lines(text, atlas, width)` breaks text into lines. A `width` of 0
    disables wrapping.
- `chifkit.label`: a `Label` that lays out text as textured triangles in
  normalised window coordinates.
  - The result is read from `vertices`, a tuple of `Point(x, y, s, t)` with
    six per visible glyph, and from `num_vertices`.
  - Setters: `set_text`, `set_position`, `set_size` (wrap width and clip
    height, 0 disables either), `set_window_size`, `set_alignment`,
    `set_pixel_size`, `set_color`, `set_indentation`, `set_font_flags` and
    `append_font_flags`.
  - Alignment and the other options come from `FontFlags`. With `Indented` set
    and no centre alignment, the first line is indented by the pixel size.
  - `rotate(degrees, x, y, z)` multiplies a rotation onto the model transform.
    `scale(x, y, z)` replaces the model transform. The combined matrix is
    available as `mvp`.
  - Pass `line_height` and `kerning` keyword arguments to use a font's own
    metrics. By default the line height is the pixel size and no kerning is
    applied.

## Install

```
pip install .
```

## Example

```python
from chifkit import backlog
from chifkit.atlas import Glyph
from chifkit.jobsystem import JobSystem
from chifkit.label import FontFlags, Label

jobs = JobSystem()
jobs.initialize(4)

results = [0] * 100
jobs.dispatch(100, 10, lambda args: results.__setitem__(args.job_index, args.job_index * 2))
jobs.wait()
backlog.log("Example", f"sum = {sum(results)}", backlog.LogLevel.INFO)

glyphs = {
    code: Glyph(width=0 if code == 32 else 4, rows=0 if code == 32 else 6, advance_x=5 << 6)
    for code in range(32, 128)
}
label = Label(glyphs, 800, 600, "Hello world", x=10, y=10, width=40, line_height=8)
label.set_alignment(FontFlags.CenterAligned)
print(label.num_vertices)

backlog.save_logs("example.log")
```

## What it does not do

- `Label` and `FontAtlas` produce vertex data and a texture array only. Nothing
  is drawn and no graphics context is used.
- The package does not rasterise fonts. Glyph bitmaps and metrics must be
  supplied by the caller.
- There is no window, GUI or command-line program.

## Tests

```
pip install .[test]
pytest
```