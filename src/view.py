"""Terminal rendering of a Projection.

Layout, top to bottom: filter bar, progress bar, separator, numbered task
rows (wrapped to the terminal width), separator, counters footer. Row
numbers are 1-based positions in the visible list; the CLI maps them
back to task ids.
"""
from typing import List
from models import Task, TodoFilter
from projection import Projection
from theme import color, HEADER_COLOR, INDEX_COLOR, DONE_COLOR, EMPTY_COLOR, PRIORITY_COLOR, C_DONE, BOLD
import re, shutil

CHECK_DONE = "✓"
CHECK_OPEN = "○"
BAR_WIDTH = 20
MIN_WIDTH = 24
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def display(projection: Projection) -> None:
    term_width = shutil.get_terminal_size((80, 30)).columns
    for line in render(projection, term_width):
        print(line)


def render(projection: Projection, width: int = 80) -> List[str]:
    width = max(MIN_WIDTH, width)
    lines: List[str] = [filter_bar(projection.filter), progress_bar(projection.progress)]
    sep = color('-' * width, HEADER_COLOR)
    lines.append(sep)
    if not projection.visible:
        lines.append(color('(no tasks)', EMPTY_COLOR))
    for idx, task in enumerate(projection.visible, start=1):
        lines.extend(_wrap_task(idx, task, width))
    lines.append(sep)
    lines.append(footer(projection))
    return lines


def filter_bar(active: TodoFilter) -> str:
    cells = []
    for f in TodoFilter:
        if f is active:
            cells.append(color(f"[{f.value}]", HEADER_COLOR, BOLD))
        else:
            cells.append(f.value)
    return '  '.join(cells)


def progress_bar(ratio: float) -> str:
    filled = int(round(BAR_WIDTH * ratio))
    bar = color('#' * filled, C_DONE) + '-' * (BAR_WIDTH - filled)
    return f"Progress [{bar}] {int(round(ratio * 100))}%"


def footer(projection: Projection) -> str:
    return (f'Total: {projection.total} | Showing: {projection.shown} | '
            f'Active: {projection.active} | Done: {projection.completed}')


def _task_segments(idx: int, task: Task):
    box = CHECK_DONE if task.is_done else CHECK_OPEN
    prefix_visible = f"{idx}. {box} "
    prefix_colored = color(f"{idx}.", INDEX_COLOR) + ' ' + (color(box, C_DONE) if task.is_done else box) + ' '
    suffix = f" ({task.priority.icon} {task.priority.value})"
    suffix_colored = color(suffix, PRIORITY_COLOR[task.priority])
    return prefix_visible, prefix_colored, suffix, suffix_colored


def _wrap_task(idx: int, task: Task, width: int) -> List[str]:
    pv, pc, suffix, suffix_colored = _task_segments(idx, task)
    limit = max(1, width - len(pv))
    lines_raw: List[str] = []
    current = ''
    for w in task.title.split():
        candidate = w if not current else current + ' ' + w
        if len(candidate) <= limit:
            current = candidate
            continue
        if current:
            lines_raw.append(current)
        # words wider than the column are hard-broken
        while len(w) > limit:
            lines_raw.append(w[:limit])
            w = w[limit:]
        current = w
    if current:
        lines_raw.append(current)
    title_style = DONE_COLOR if task.is_done else ''
    colored: List[str] = []
    for i, raw_line in enumerate(lines_raw):
        lead = pc if i == 0 else ' ' * len(pv)
        colored.append(lead + (color(raw_line, title_style) if title_style else raw_line))
    # priority label joins the last line when it fits
    if len(lines_raw[-1]) + len(suffix) <= limit:
        colored[-1] += suffix_colored
    else:
        colored.append(' ' * len(pv) + color(suffix.strip(), PRIORITY_COLOR[task.priority]))
    return colored


def _visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))
