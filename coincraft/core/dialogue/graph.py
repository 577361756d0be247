"""대화 그래프 - node_id로 키가 걸린 노드 아레나

여러 노드의 선택지가 같은 노드(공유 메뉴 등)로 돌아올 수 있으므로
트리가 아닌 방향 그래프다. 순환은 정상이다.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from coincraft.core.dialogue.effects import Effect, effect_from_dict, effect_to_dict
from coincraft.core.dialogue.models import DialogueNode, DialogueOption


@dataclass(frozen=True, eq=False)
class DialogueGraph:
    """완성된 대화 그래프 (불변)"""

    owner: str
    root_id: str
    nodes: Mapping[str, DialogueNode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.root_id not in self.nodes:
            raise ValueError(f"Root node {self.root_id!r} not in graph {self.owner!r}")
        for node in self.nodes.values():
            for option in node.options:
                if option.target is not None and option.target not in self.nodes:
                    raise ValueError(
                        f"Option {option.label!r} on node {node.node_id!r} "
                        f"points to unknown node {option.target!r}"
                    )
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root(self) -> DialogueNode:
        return self.nodes[self.root_id]

    def node(self, node_id: str) -> DialogueNode:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise ValueError(
                f"Unknown node {node_id!r} in graph {self.owner!r}"
            ) from None

    def reachable_ids(self, start_id: Optional[str] = None) -> set[str]:
        """start_id(기본 root)에서 선택지를 따라 도달 가능한 노드 집합"""
        start = start_id if start_id is not None else self.root_id
        seen = {start}
        queue = deque([start])
        while queue:
            for option in self.nodes[queue.popleft()].options:
                if option.target is not None and option.target not in seen:
                    seen.add(option.target)
                    queue.append(option.target)
        return seen

    # === 직렬화 ===

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner": self.owner,
            "root_id": self.root_id,
            "nodes": [_node_to_dict(n) for n in self.nodes.values()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DialogueGraph":
        nodes = [_node_from_dict(n) for n in data["nodes"]]
        return cls(
            owner=data["owner"],
            root_id=data["root_id"],
            nodes={n.node_id: n for n in nodes},
        )


class DialogueGraphBuilder:
    """NPC 대화 조립기. build() 이후 노드는 불변.

    사용 패턴:
        b = DialogueGraphBuilder("Wise Lady", speaker="Wise Lady")
        b.node("menu", "What would you like to learn?")
        b.node("budget", "Budgeting is ...")
        b.option("menu", "Teach me budgeting", "budget")
        b.option("budget", "Back", "menu")
        graph = b.build("menu")
    """

    def __init__(self, owner: str, speaker: Optional[str] = None) -> None:
        self._owner = owner
        self._speaker = speaker or owner
        self._nodes: dict[str, dict[str, Any]] = {}
        self._options: dict[str, list[DialogueOption]] = {}

    def node(
        self,
        node_id: str,
        text: str,
        *,
        speaker: Optional[str] = None,
        on_enter: Iterable[Effect] = (),
        on_exit: Iterable[Effect] = (),
        mood: str = "neutral",
        difficulty: int = 1,
        keywords: Iterable[str] = (),
    ) -> "DialogueGraphBuilder":
        if node_id in self._nodes:
            raise ValueError(f"Duplicate node id {node_id!r}")
        self._nodes[node_id] = {
            "node_id": node_id,
            "speaker": speaker or self._speaker,
            "text": text,
            "on_enter": tuple(on_enter),
            "on_exit": tuple(on_exit),
            "mood": mood,
            "difficulty": difficulty,
            "keywords": frozenset(keywords),
        }
        self._options[node_id] = []
        return self

    def option(
        self,
        from_id: str,
        label: str,
        target: Optional[str] = None,
        *,
        on_select: Iterable[Effect] = (),
        tooltip: Optional[str] = None,
        valence: str = "neutral",
        points: int = 0,
    ) -> "DialogueGraphBuilder":
        if from_id not in self._nodes:
            raise ValueError(f"Cannot add option to unknown node {from_id!r}")
        self._options[from_id].append(
            DialogueOption(
                label=label,
                target=target,
                on_select=tuple(on_select),
                tooltip=tooltip,
                valence=valence,
                points=points,
            )
        )
        return self

    def build(self, root_id: str) -> DialogueGraph:
        nodes = {
            node_id: DialogueNode(options=tuple(self._options[node_id]), **fields)
            for node_id, fields in self._nodes.items()
        }
        return DialogueGraph(owner=self._owner, root_id=root_id, nodes=nodes)


# === 내부 직렬화 헬퍼 ===


def _option_to_dict(option: DialogueOption) -> dict[str, Any]:
    return {
        "label": option.label,
        "target": option.target,
        "on_select": [effect_to_dict(e) for e in option.on_select],
        "tooltip": option.tooltip,
        "valence": option.valence,
        "points": option.points,
    }


def _node_to_dict(node: DialogueNode) -> dict[str, Any]:
    return {
        "node_id": node.node_id,
        "speaker": node.speaker,
        "text": node.text,
        "options": [_option_to_dict(o) for o in node.options],
        "on_enter": [effect_to_dict(e) for e in node.on_enter],
        "on_exit": [effect_to_dict(e) for e in node.on_exit],
        "mood": node.mood,
        "difficulty": node.difficulty,
        "keywords": sorted(node.keywords),
    }


def _node_from_dict(data: dict[str, Any]) -> DialogueNode:
    options = tuple(
        DialogueOption(
            label=o["label"],
            target=o.get("target"),
            on_select=tuple(effect_from_dict(e) for e in o.get("on_select", [])),
            tooltip=o.get("tooltip"),
            valence=o.get("valence", "neutral"),
            points=o.get("points", 0),
        )
        for o in data.get("options", [])
    )
    return DialogueNode(
        node_id=data["node_id"],
        speaker=data["speaker"],
        text=data["text"],
        options=options,
        on_enter=tuple(effect_from_dict(e) for e in data.get("on_enter", [])),
        on_exit=tuple(effect_from_dict(e) for e in data.get("on_exit", [])),
        mood=data.get("mood", "neutral"),
        difficulty=data.get("difficulty", 1),
        keywords=frozenset(data.get("keywords", [])),
    )
