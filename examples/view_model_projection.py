#!/usr/bin/env python3
"""Project domain records into display rows.

This example demonstrates:
1. A one-way Synchronizer from models to view rows
2. Positional inserts with AddStrategy.MIRROR_INDEX
3. Structured JSON logging of every relay
4. Reading RelayStats

Run this example:
    python view_model_projection.py
"""

from dataclasses import dataclass

from collection_sync import (
    AddStrategy,
    ObservableList,
    SyncConfig,
    SyncMode,
    Synchronizer,
)
from collection_sync.utils.logging import configure_root_logger


@dataclass
class Task:
    title: str
    done: bool = False


@dataclass
class TaskRow:
    label: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskRow":
        mark = "x" if task.done else " "
        return cls(f"[{mark}] {task.title}")


def row_to_task(row: TaskRow) -> Task:
    return Task(title=row.label[4:], done=row.label.startswith("[x]"))


def main():
    configure_root_logger(level="DEBUG", json_output=True)

    tasks = ObservableList([Task("write docs"), Task("ship", done=True)])
    rows = ObservableList([TaskRow.from_task(t) for t in tasks])

    config = SyncConfig(
        mode=SyncMode.ONE_WAY_TO_TARGET,
        add_strategy=AddStrategy.MIRROR_INDEX,
        name="tasks->rows",
    )

    with Synchronizer(tasks, rows, row_to_task, TaskRow.from_task, config) as sync:
        tasks.insert(1, Task("review"))
        tasks[0] = Task("write docs", done=True)
        tasks.move(2, 0)

        # Rows are display-only; editing them does not touch the tasks
        rows.append(TaskRow("[ ] scratch"))

        print()
        for row in rows:
            print(row.label)
        print(f"\ntasks: {len(tasks)}  rows: {len(rows)}")
        print(f"stats: {sync.stats.to_dict()}")


if __name__ == "__main__":
    main()
