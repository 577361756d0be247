"""DialogueEngine 테스트 - 훅 순서, 순환 그래프, 재진입 방지"""

import pytest

from coincraft.core.dialogue import (
    DialogueEngine,
    DialogueGraphBuilder,
    LogMessage,
)
from coincraft.core.event_types import EventTypes


class RecordingHandler:
    """LogMessage 효과를 순서대로 기록"""

    def __init__(self):
        self.calls: list[str] = []

    def handle(self, effect, node):
        self.calls.append(effect.message)


def _hooks(node_id: str) -> dict:
    return {
        "on_enter": (LogMessage(f"enter:{node_id}"),),
        "on_exit": (LogMessage(f"exit:{node_id}"),),
    }


def _cyclic_graph():
    """root → menu → topic_a → menu → topic_b → root"""
    b = DialogueGraphBuilder("Wise Lady")
    for node_id in ("root", "menu", "topic_a", "topic_b"):
        b.node(node_id, f"{node_id} text", **_hooks(node_id))
    b.option("root", "Menu", "menu", on_select=(LogMessage("select:root"),))
    b.option("root", "Bye", None)
    b.option("menu", "Topic A", "topic_a")
    b.option("menu", "Topic B", "topic_b")
    b.option("topic_a", "Back", "menu")
    b.option("topic_b", "Start over", "root")
    return b.build("root")


class TestHookOrder:
    def test_start_runs_root_enter(self):
        handler = RecordingHandler()
        engine = DialogueEngine(_cyclic_graph(), handler)
        root = engine.start()
        assert root.node_id == "root"
        assert handler.calls == ["enter:root"]
        assert engine.is_active

    def test_select_then_exit_then_enter(self):
        handler = RecordingHandler()
        engine = DialogueEngine(_cyclic_graph(), handler)
        engine.start()
        nxt = engine.select_option(0)
        assert nxt.node_id == "menu"
        assert handler.calls == ["enter:root", "select:root", "exit:root", "enter:menu"]

    def test_none_target_ends_conversation(self):
        handler = RecordingHandler()
        engine = DialogueEngine(_cyclic_graph(), handler)
        engine.start()
        assert engine.select_option(1) is None
        assert not engine.is_active
        assert engine.current_node is None
        assert handler.calls == ["enter:root", "exit:root"]

    def test_cyclic_walk_never_double_enters(self):
        handler = RecordingHandler()
        engine = DialogueEngine(_cyclic_graph(), handler)
        engine.start()
        for index in (0, 0, 0, 1, 0):  # root→menu→a→menu→b→root
            engine.select_option(index)

        assert engine.current_node.node_id == "root"
        hooks = [c for c in handler.calls if not c.startswith("select")]
        for previous, current in zip(hooks, hooks[1:]):
            if current.startswith("enter:"):
                assert previous.startswith("exit:"), handler.calls
        assert hooks.count("enter:menu") == 2
        assert hooks.count("exit:menu") == 2


class TestEnd:
    def test_end_runs_exit_once(self):
        handler = RecordingHandler()
        engine = DialogueEngine(_cyclic_graph(), handler)
        engine.start()
        engine.select_option(0)
        engine.end()
        engine.end()
        assert handler.calls[-1] == "exit:menu"
        assert handler.calls.count("exit:menu") == 1
        assert not engine.is_active

    def test_end_before_start_is_noop(self):
        handler = RecordingHandler()
        engine = DialogueEngine(_cyclic_graph(), handler)
        engine.end()
        assert handler.calls == []

    def test_restart_after_end(self):
        handler = RecordingHandler()
        engine = DialogueEngine(_cyclic_graph(), handler)
        engine.start()
        engine.end()
        engine.start()
        assert handler.calls == ["enter:root", "exit:root", "enter:root"]


class TestUsageErrors:
    def test_option_out_of_range(self):
        engine = DialogueEngine(_cyclic_graph(), RecordingHandler())
        engine.start()
        with pytest.raises(IndexError):
            engine.select_option(5)
        with pytest.raises(IndexError):
            engine.select_option(-1)
        assert engine.current_node.node_id == "root"

    def test_select_when_inactive(self):
        engine = DialogueEngine(_cyclic_graph(), RecordingHandler())
        with pytest.raises(RuntimeError):
            engine.select_option(0)

    def test_start_twice(self):
        engine = DialogueEngine(_cyclic_graph(), RecordingHandler())
        engine.start()
        with pytest.raises(RuntimeError):
            engine.start()

    def test_stale_node_id(self):
        engine = DialogueEngine(_cyclic_graph(), RecordingHandler())
        engine.start()
        engine.select_option(0, node_id="root")
        with pytest.raises(ValueError):
            engine.select_option(0, node_id="root")

    def test_start_at_unreachable_node(self):
        b = DialogueGraphBuilder("npc")
        b.node("root", "hi")
        b.node("island", "nobody links here")
        engine = DialogueEngine(b.build("root"), RecordingHandler())
        with pytest.raises(ValueError):
            engine.start("island")

    def test_start_at_reachable_node(self):
        engine = DialogueEngine(_cyclic_graph(), RecordingHandler())
        assert engine.start("topic_b").node_id == "topic_b"

    def test_effect_driving_engine_is_rejected(self):
        """효과 처리 중 같은 엔진을 다시 조작하면 RuntimeError"""
        graph = _cyclic_graph()

        class Meddler:
            engine = None

            def handle(self, effect, node):
                if effect.message == "select:root":
                    self.engine.select_option(0)

        meddler = Meddler()
        engine = DialogueEngine(graph, meddler)
        meddler.engine = engine
        engine.start()
        with pytest.raises(RuntimeError):
            engine.select_option(0)


class TestEvents:
    def test_transition_events(self, event_bus):
        seen = []
        for event_type in (
            EventTypes.DIALOGUE_STARTED,
            EventTypes.DIALOGUE_NODE_ENTERED,
            EventTypes.DIALOGUE_NODE_EXITED,
            EventTypes.DIALOGUE_OPTION_SELECTED,
            EventTypes.DIALOGUE_ENDED,
        ):
            event_bus.subscribe(event_type, lambda e: seen.append((e.event_type, e.data)))

        engine = DialogueEngine(_cyclic_graph(), RecordingHandler(), event_bus=event_bus)
        engine.start()
        engine.select_option(1)

        assert [t for t, _ in seen] == [
            EventTypes.DIALOGUE_STARTED,
            EventTypes.DIALOGUE_NODE_ENTERED,
            EventTypes.DIALOGUE_OPTION_SELECTED,
            EventTypes.DIALOGUE_NODE_EXITED,
            EventTypes.DIALOGUE_ENDED,
        ]
        assert seen[-1][1] == {
            "owner": "Wise Lady",
            "last_node_id": "root",
            "reason": "option",
        }

    def test_engine_ignores_subscriber_failure(self, event_bus):
        def broken(e):
            raise RuntimeError("sound card missing")

        event_bus.subscribe(EventTypes.DIALOGUE_NODE_ENTERED, broken)
        engine = DialogueEngine(_cyclic_graph(), RecordingHandler(), event_bus=event_bus)
        engine.start()
        assert engine.select_option(0).node_id == "menu"
