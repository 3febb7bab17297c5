from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Sequence

from utils.next_action import ActionKind
from utils.row_parser import Overlay


@dataclass(frozen=True)
class OverlayGraph:
    overlays: List[Overlay]
    groups: Dict[str, List[str]] = field(default_factory=dict)
    # Last overlay seen wins when titles repeat; repeated titles are listed in duplicate_titles
    overlays_by_title: Dict[str, Overlay] = field(default_factory=dict)
    duplicate_titles: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overlays": [overlay.to_dict() for overlay in self.overlays],
            "groups": {name: list(ids) for name, ids in self.groups.items()},
            "overlays_by_title": {title: overlay.to_dict() for title, overlay in self.overlays_by_title.items()},
            "duplicate_titles": list(self.duplicate_titles),
        }


def link_next_questions(ordered: Sequence[Overlay]) -> List[Overlay]:
    """Point each next_question overlay at the timestamp of the next quiz after it.

    Overlays with no later quiz keep their parameter and act as terminal links.
    """
    linked = list(ordered)
    for index, overlay in enumerate(linked):
        if overlay.next_action.kind != ActionKind.NEXT_QUESTION:
            continue
        target = next((later for later in linked[index + 1:] if later.is_question), None)
        if target is not None:
            linked[index] = replace(overlay, next_action=overlay.next_action.with_param(target.timestamp))
    return linked


def build_overlay_graph(overlays: Sequence[Overlay]) -> OverlayGraph:
    """Order overlays by timestamp, resolve question chains and index groups/titles."""
    # sorted() is stable, so equal timestamps keep source order
    ordered = link_next_questions(sorted(overlays, key=lambda overlay: overlay.timestamp))

    groups: Dict[str, List[str]] = {}
    overlays_by_title: Dict[str, Overlay] = {}
    duplicate_titles: List[str] = []
    for overlay in ordered:
        if overlay.title in overlays_by_title and overlay.title not in duplicate_titles:
            duplicate_titles.append(overlay.title)
        overlays_by_title[overlay.title] = overlay
        if overlay.group_name:
            groups.setdefault(overlay.group_name, []).append(overlay.id)

    return OverlayGraph(
        overlays=ordered,
        groups=groups,
        overlays_by_title=overlays_by_title,
        duplicate_titles=duplicate_titles,
    )
