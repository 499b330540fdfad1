# plotmon

A small terminal plot monitor for metrics written line by line to a JSONL
file, such as the losses and accuracies a training loop logs each epoch.

Every line of the file that holds a JSON object counts as one epoch, numbered
from zero. Each numeric field of that object adds a point to the series of the
same name. Lines that are not JSON objects are skipped and do not count as
epochs; values that are not numbers (including booleans) are ignored.

The directory of the file is watched for changes. When the file is written,
created, moved or removed, it is read again and the chart is redrawn. A
missing file shows `FILE NOT FOUND`, and a file with no series left to draw
shows `NO DATA`.

The chart is drawn with curses, one Braille-dot line per series in cycling
colours, with a legend, axis labels for the first, middle and last epoch, and
y labels in scientific notation.

## Installation

```
pip install .
```

## Usage

```
pm metrics.jsonl
```

Press `q`, `Esc` or `Ctrl+C` to quit.

### Options

| Option | Meaning |
| --- | --- |
| `-m`, `--mode` | Display mode: `tui` (the default) or `gui` (rejected, see below) |
| `-e`, `--except NAMES` | Leave out these series (comma separated) |
| `-o`, `--only NAMES` | Show only these series (comma separated) |
| `--min-epoch N` | First epoch to show |
| `--max-epoch N` | Show only epochs before this one |
| `--min Y` | Lower bound of the y axis (computed from the data by default) |
| `--max Y` | Upper bound of the y axis (computed from the data by default) |
| `--span N` | Show only epochs no more than N before the last one |
| `-V`, `--version` | Print the version and exit |

`--except` takes precedence over `--only`: when it is given, `--only` is
ignored. `--span` takes precedence over `--min-epoch` and `--max-epoch`.
The epoch options take non-negative integers.

Examples:

```
pm train.jsonl --only loss,val_loss
pm train.jsonl --except lr --span 100
pm train.jsonl --min 0 --max 1
```

## Library use

The parsing, filtering and watching parts can be used without the terminal
interface:

```python
from plotmon.filter import FilterOpts
from plotmon.logs import Logs

with Logs("train.jsonl", FilterOpts(only=["loss"])) as logs:
    iterable = logs.lock_iter()
    if iterable is not None:
        with iterable:
            for name, points in iterable.iter():
                print(name, points[-1])
```

`Logs.lock_iter` returns `None` when the file cannot be read; otherwise the
view holds its locks until the `with` block ends. Pass `watch=False` to `Logs`
to read the file once without starting a watcher. Each reload puts `True` on
`Logs.updates`.

`plotmon.parse.parse_file` reads a file into a dictionary mapping each series
name to its list of `(epoch, value)` pairs, and `plotmon.parse.parse` does the
same for any iterable of lines. `plotmon.datasets.draw_datasets` renders the
chart of a `Logs` object into a grid of `(character, colour)` cells without
touching the terminal.

## Limitations

There is no graphical mode: `--mode gui` is accepted by the parser but the
command stops with the error `gui mode is not supported`. The terminal
interface needs a curses-capable terminal.

## Development

```
pip install -e ".[test]"
pytest
```