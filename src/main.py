"""Main entry point for the terminal to-do list.

State is in-memory only; every run starts from the sample tasks (or an
empty list with TODO_SAMPLES=0).
"""
import logging
import os

from store import TaskStore
from cli import CLI, _truthy_env


def main():
    level = getattr(logging, os.getenv("TODO_LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if _truthy_env(os.getenv("TODO_SAMPLES"), True):
        store = TaskStore.with_samples()
    else:
        store = TaskStore()
    CLI(store).run()

if __name__ == "__main__":
    main()
