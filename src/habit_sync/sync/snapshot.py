from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class TaskProject:
    id: str
    name: str


@dataclass(frozen=True)
class TaskItem:
    project_id: str
    content: str
    indent: int
    completed: bool


@dataclass
class TaskSnapshot:
    projects: List[TaskProject] = field(default_factory=list)
    items: List[TaskItem] = field(default_factory=list)

    def find_project(self, name: str) -> Optional[TaskProject]:
        for project in self.projects:
            if project.name == name:
                return project
        return None
