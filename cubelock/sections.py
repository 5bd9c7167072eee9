from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from cubelock.models import Face, FaceEvent, FaceTransition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    name: str
    path: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Section name must be non-empty")
        if not self.path.startswith("/"):
            raise ValueError(f"Section path must be absolute, got '{self.path}'")


DEFAULT_SECTIONS: dict[str, Section] = {
    "white": Section(name="About", path="/about"),
    "yellow": Section(name="Experience", path="/experience"),
    "green": Section(name="Projects", path="/projects"),
    "blue": Section(name="Skills", path="/skills"),
    "red": Section(name="Contact", path="/contact"),
    "orange": Section(name="Blog", path="/blog"),
}


def get_section(color: str | None, sections: Mapping[str, Section] | None = None) -> Section:
    registry = DEFAULT_SECTIONS if sections is None else sections
    key = (color or "").strip().lower()
    if key not in registry:
        available = ", ".join(sorted(registry))
        raise KeyError(f"No section bound to color: {color}. Available colors: {available}")
    return registry[key]


class UnlockBoard:
    """Keeps one navigation link per solved face.

    A face that gets solved unlocks the section of its center color; a face that
    stops being solved retracts its link.
    """

    def __init__(self, sections: Mapping[str, Section] | None = None) -> None:
        self.sections = dict(DEFAULT_SECTIONS if sections is None else sections)
        self._links: dict[Face, Section] = {}

    def handle(self, event: FaceEvent) -> None:
        if event.transition == FaceTransition.SOLVED:
            try:
                section = get_section(event.color, self.sections)
            except KeyError:
                logger.warning("No section bound to color %s on %s face", event.color, event.face.value)
                return
            self._links[event.face] = section
            logger.info("Unlocked %s (%s) via %s face", section.name, section.path, event.face.value)
            return

        retracted = self._links.pop(event.face, None)
        if retracted is not None:
            logger.info("Retracted %s link from %s face", retracted.name, event.face.value)

    def clear(self) -> None:
        self._links.clear()

    def link_for(self, face: Face) -> Section | None:
        return self._links.get(Face(face))

    @property
    def links(self) -> dict[Face, Section]:
        return dict(self._links)

    def unlocked_sections(self) -> list[Section]:
        seen: list[Section] = []
        for section in self._links.values():
            if section not in seen:
                seen.append(section)
        return seen
