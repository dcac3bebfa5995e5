# fedit

fedit is a small text editor that runs in a terminal. It supports the mouse, selection, copy and paste, and undo and redo with no limit on history. It treats characters made of several code points, such as emoji with skin tones or letters with combining accents, as single characters. It also measures the display width of wide characters and tabs correctly.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Usage

To open a file, or to start a new one with that name:

```
fedit notes.txt
```

If the file cannot be read, the editor opens an empty buffer under that name. Running `fedit` without a file name also gives an empty buffer, but there is then no file to save to. Pressing Ctrl+S in that case only shows "No filename specified" in the status bar.

## Keys

| Key                       | Action                                       |
|---------------------------|----------------------------------------------|
| Ctrl+Q                    | Quit                                         |
| Ctrl+S                    | Save the file                                |
| Ctrl+C                    | Copy the selection                           |
| Ctrl+V                    | Paste                                        |
| Ctrl+Z                    | Undo                                         |
| Ctrl+Y                    | Redo                                         |
| Arrow keys                | Move the cursor                              |
| Shift+Arrow keys          | Extend the selection                         |
| Super+Left / Super+Right  | Go to the start or end of the line           |
| Super+Up / Super+Down     | Go to the start or end of the file           |
| Backspace                 | Delete the character or line break before the cursor |
| Enter                     | Split the line at the cursor                 |
| Tab                       | Insert a tab, drawn as four spaces           |
| Left mouse click          | Put the cursor where you click               |

When Super+Left is pressed at the start of a line, the cursor moves to the end of the previous line. When Super+Right is pressed at the end of a line, the cursor moves to the start of the next line.

The status bar at the bottom shows the file name and the cursor position as `line:column`. After a save it shows the result for three seconds, either "Saved to …" or the error.

Files are read as UTF-8. Lines are joined with `\n` when the file is saved, and no newline is written after the last line.

## What it does not do

fedit has no Delete key, no cut, no search, and no "save as". Typing or pasting while text is selected does not replace the selection. The new text is inserted at the cursor and the selection stays as it was. The only file it can save to is the one named on the command line.

## Using it as a library

You can drive the editing model without a terminal by giving `Editor` fixed dimensions:

```python
from fedit.editor import Editor
from fedit.point import Point

editor = Editor(dimensions=Point(80, 24))
for c in "hello":
    editor.insert_char(c)
editor.insert_newline()
editor.undo()
print([line.text() for line in editor.content])  # ['hello']
```

The package has these modules:

- `fedit.editor` contains `Editor`, together with the `Direction` and `Modifiers` enums. `Editor` handles editing, movement, selection, copy, paste, undo and redo, and loading and saving files.
- `fedit.line` contains `Line`, a line stored as grapheme clusters. It provides `width_to` and `x_at_width` for converting between display width and character position.
- `fedit.point` contains `Point`. Points are ordered by row first, then by column.
- `fedit.action` contains `Action`, `ActionType` and `UndoStack`.
- `fedit.status` contains `Status`, a status bar message that expires after three seconds.
- `fedit.screen` contains `Screen`, which draws an editor onto a `blessed` terminal, and the helpers it uses.
- `fedit.app` contains the key translation (`translate_key`, `dispatch`), the event loop (`run`) and the `main` entry point for the command.