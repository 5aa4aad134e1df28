# jirakit

Building blocks for command-line Jira tooling:

- **Markup conversion** between CommonMark and Jira wiki markup
  (`jirakit.md.to_jira_md`, `jirakit.md.from_jira_md`, `jirakit.jirawiki.parse`).
- **`.netrc` lookup** for stored credentials (`jirakit.netrc.read`,
  `jirakit.netrc.parse_netrc`).
- **Editor prompts** that open the user's editor on a temporary file
  (`jirakit.editor`).
- **A terminal text view** and paging helpers (`jirakit.tui.text`,
  `jirakit.tui.screen`, `jirakit.tui.helper`).

## Installation

```
pip install jirakit
```

## Converting markup

```python
from jirakit.md import from_jira_md, to_jira_md

print(from_jira_md("h1. Release notes"), end="")
# # Release notes

print(to_jira_md("# Release notes\n\n**bold** text"))
```

`from_jira_md` (the same as `jirakit.jirawiki.parse`) understands headings,
bold text, ordered and unordered lists, links, `{quote}` and `bq.` quotes,
panels, `{code}` and `{noformat}` blocks, and tables.

`to_jira_md` parses CommonMark with tables and strikethrough enabled and
writes headings, emphasis, lists, links, images, quotes, rules, tables and
`{code}` blocks in Jira markup. An empty string is returned unchanged.

## Reading credentials from `.netrc`

```python
from jirakit.netrc import NetrcEntryNotFound, read

try:
    entry = read("https://jira.example.com", "user@example.com")
    print(entry.machine, entry.login)
except NetrcEntryNotFound:
    print("no stored credentials")
```

`read` matches the host part of the URL against `machine` entries and raises
`ValueError` for a string that is not a request URI. The file is taken from
`$NETRC`, or `~/.netrc` (`~/_netrc` on Windows); a missing file simply has no
entries. It is read once per process. `parse_netrc` turns netrc text into a
list of `Entry` objects, keeping only entries with a machine, login and
password, skipping `macdef` bodies and stopping at `default`.

## Editing text in an editor

```python
from jirakit.editor import JiraEditor, editor_name

print(editor_name(""))  # the editor that would be launched
body = JiraEditor(message="Description", blank_allowed=True).prompt()
```

The editor is chosen from `JIRA_EDITOR`, `VISUAL` or `EDITOR`, falling back
to `nano` (`notepad` on Windows); see `default_editor()`. The prompt reads
standard input one character at a time: `e` (or Ctrl+D) launches the editor,
Enter returns at once when `blank_allowed` is set, Ctrl+C raises
`KeyboardInterrupt`, and `help_input` (default `?`) shows the help text. An
empty result falls back to `default` unless `append_default` is set.

`edit(editor_command, file_name, initial_value, look_path)` can be used
directly: it writes `initial_value` to a temporary file, runs the editor on
it and returns the saved text.

## Terminal text view

```python
from jirakit.tui.text import Text

Text().render("First line\nSecond line")
```

The view scrolls and closes on Escape or `q`. It runs inside a
`jirakit.tui.screen.Screen`, which offers `paint`, `stop`, `draw` and
`suspend` (hand the terminal back while a function runs).

`jirakit.tui.helper` has `pad`, `split_text`, `is_dumb_terminal`,
`is_not_tty`, `get_pager` and `pager_out`. Output for the pager goes to
`JIRA_PAGER` or `PAGER` (default `less`, `cat` on dumb terminals, none on
Windows), with `LESS=R` set when `LESS` is unset.

## What is not included

The package has no table or preview layouts, no modal dialogs and no
command-line program; it is a library to be called from your own code.

## Running the tests

```
pip install -e ".[test]"
pytest
```