"""
快捷键分发测试

测试范围：
- F1~F9 / Ctrl+G / Alt+R / Alt+G 分发
- 阻止默认行为（含 F10 等无回调按键）
- Ctrl+G 大小写、Alt+G 大小写问题（及修正开关）
- 注册 / 替换 / 注销生命周期
"""
from typing import List

import pytest

from tallyboard.shortcuts import KeyPress, ShortcutBindings, ShortcutDispatcher, build_rules


class FakeEventSource:
    """记录订阅情况的事件源"""

    def __init__(self):
        self.handlers: List = []
        self.subscribe_calls = 0
        self.unsubscribe_calls = 0

    def subscribe(self, handler) -> None:
        self.subscribe_calls += 1
        self.handlers.append(handler)

    def unsubscribe(self, handler) -> None:
        self.unsubscribe_calls += 1
        self.handlers.remove(handler)

    def emit(self, key: str, ctrl: bool = False, alt: bool = False, shift: bool = False) -> KeyPress:
        event = KeyPress(key=key, ctrl=ctrl, alt=alt, shift=shift)
        for handler in list(self.handlers):
            handler(event)
        return event


class Recorder:
    """记录回调调用顺序"""

    def __init__(self):
        self.calls: List[str] = []

    def __call__(self, name: str):
        return lambda: self.calls.append(name)

    def all_bindings(self) -> ShortcutBindings:
        slots = {f"on_f{n}": self(f"F{n}") for n in range(1, 10)}
        return ShortcutBindings(
            on_ctrl_g=self("ctrl-g"),
            on_alt_r=self("alt-r"),
            on_alt_g=self("alt-g"),
            **slots
        )


@pytest.fixture
def source():
    return FakeEventSource()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def dispatcher(source, recorder):
    d = ShortcutDispatcher(source)
    d.start(recorder.all_bindings())
    yield d
    d.stop()


class TestFunctionKeys:

    def test_f1_dispatches_and_suppresses(self, source, recorder, dispatcher):
        """KEY-001: F1 只触发 F1 回调并阻止默认行为"""
        event = source.emit("F1")
        assert recorder.calls == ["F1"]
        assert event.default_prevented

    @pytest.mark.parametrize("n", range(1, 10))
    def test_each_function_key(self, source, recorder, dispatcher, n):
        event = source.emit(f"F{n}")
        assert recorder.calls == [f"F{n}"]
        assert event.default_prevented

    @pytest.mark.parametrize("key", ["F10", "F11", "F12", "F24"])
    def test_other_function_keys_suppressed_without_callback(self, source, recorder, dispatcher, key):
        """KEY-002: F10 等按键没有回调，但仍阻止默认行为"""
        event = source.emit(key)
        assert recorder.calls == []
        assert event.default_prevented

    def test_any_f_prefixed_key_is_suppressed(self, source, recorder, dispatcher):
        # 以 "F" 开头的任意标识都会被拦截
        event = source.emit("Fn")
        assert recorder.calls == []
        assert event.default_prevented

    def test_function_key_match_is_exact(self, source, recorder, dispatcher):
        source.emit("F1", ctrl=True)
        source.emit("F10")
        assert recorder.calls == ["F1"]

    def test_missing_callback_is_ignored(self, source):
        dispatcher = ShortcutDispatcher(source)
        dispatcher.start(ShortcutBindings())
        event = source.emit("F5")
        assert event.default_prevented

    def test_plain_letters_untouched(self, source, recorder, dispatcher):
        event = source.emit("a")
        assert recorder.calls == []
        assert not event.default_prevented


class TestModifierKeys:

    def test_ctrl_g(self, source, recorder, dispatcher):
        """KEY-003: Ctrl+g 触发回调并阻止默认行为"""
        event = source.emit("g", ctrl=True)
        assert recorder.calls == ["ctrl-g"]
        assert event.default_prevented

    def test_ctrl_uppercase_g_does_not_match(self, source, recorder, dispatcher):
        """KEY-004: Ctrl+G（大写）既不阻止也不分发"""
        event = source.emit("G", ctrl=True, shift=True)
        assert recorder.calls == []
        assert not event.default_prevented

    def test_g_without_ctrl(self, source, recorder, dispatcher):
        event = source.emit("g")
        assert recorder.calls == []
        assert not event.default_prevented

    def test_alt_r(self, source, recorder, dispatcher):
        event = source.emit("r", alt=True)
        assert recorder.calls == ["alt-r"]
        assert event.default_prevented

    def test_alt_uppercase_r_not_matched(self, source, recorder, dispatcher):
        event = source.emit("R", alt=True, shift=True)
        assert recorder.calls == []
        assert not event.default_prevented

    def test_alt_lowercase_g_dispatches_without_suppression(self, source, recorder, dispatcher):
        """KEY-005: Alt+g 触发回调，但阻止规则只匹配大写 G"""
        event = source.emit("g", alt=True)
        assert recorder.calls == ["alt-g"]
        assert not event.default_prevented

    def test_alt_uppercase_g_suppressed_without_dispatch(self, source, recorder, dispatcher):
        event = source.emit("G", alt=True, shift=True)
        assert recorder.calls == []
        assert event.default_prevented

    def test_ctrl_alt_g_fires_both(self, source, recorder, dispatcher):
        """KEY-006: 多条规则可同时命中"""
        event = source.emit("g", ctrl=True, alt=True)
        assert recorder.calls == ["ctrl-g", "alt-g"]
        assert event.default_prevented


class TestAltGCaseFix:

    @pytest.fixture
    def fixed(self, source, recorder):
        d = ShortcutDispatcher(source, fix_alt_g_case=True)
        d.start(recorder.all_bindings())
        yield d
        d.stop()

    def test_lowercase_g(self, source, recorder, fixed):
        event = source.emit("g", alt=True)
        assert recorder.calls == ["alt-g"]
        assert event.default_prevented

    def test_uppercase_g(self, source, recorder, fixed):
        event = source.emit("G", alt=True, shift=True)
        assert recorder.calls == ["alt-g"]
        assert event.default_prevented

    def test_other_rules_unchanged(self, source, recorder, fixed):
        assert not source.emit("G", ctrl=True).default_prevented
        source.emit("F10")
        assert recorder.calls == []

    def test_rule_tables_differ_only_in_alt_g(self):
        verbatim = {rule.name for rule in build_rules()}
        fixed = {rule.name for rule in build_rules(fix_alt_g_case=True)}
        assert verbatim == fixed
        assert len(build_rules()) == 15


class TestLifecycle:

    def test_start_subscribes_once(self, source, recorder):
        dispatcher = ShortcutDispatcher(source)
        assert not dispatcher.is_active
        dispatcher.start(recorder.all_bindings())
        assert dispatcher.is_active
        assert len(source.handlers) == 1

    def test_restart_replaces_subscription(self, source):
        """KEY-007: 重新注册后旧回调不再触发"""
        old, new = Recorder(), Recorder()
        dispatcher = ShortcutDispatcher(source)
        dispatcher.start(old.all_bindings())
        dispatcher.start(new.all_bindings())

        source.emit("F2")
        assert old.calls == []
        assert new.calls == ["F2"]
        assert len(source.handlers) == 1
        assert source.unsubscribe_calls == 1

    def test_restart_with_same_bindings_does_not_duplicate(self, source, recorder):
        bindings = recorder.all_bindings()
        dispatcher = ShortcutDispatcher(source)
        dispatcher.start(bindings)
        dispatcher.start(bindings)
        source.emit("F3")
        assert recorder.calls == ["F3"]

    def test_stop_unsubscribes(self, source, recorder):
        dispatcher = ShortcutDispatcher(source)
        dispatcher.start(recorder.all_bindings())
        dispatcher.stop()
        event = source.emit("F1")
        assert recorder.calls == []
        assert not event.default_prevented
        assert source.handlers == []

    def test_stop_is_idempotent(self, source):
        dispatcher = ShortcutDispatcher(source)
        dispatcher.stop()
        dispatcher.start(ShortcutBindings())
        dispatcher.stop()
        dispatcher.stop()
        assert source.unsubscribe_calls == 1

    def test_context_manager_releases_on_error(self, source, recorder):
        dispatcher = ShortcutDispatcher(source)
        with pytest.raises(RuntimeError):
            with dispatcher.active(recorder.all_bindings()):
                source.emit("F4")
                raise RuntimeError("boom")
        assert recorder.calls == ["F4"]
        assert source.handlers == []
        assert not dispatcher.is_active


class TestCallbackErrors:

    def test_failing_callback_does_not_stop_other_rules(self, source, recorder, caplog):
        def broken():
            raise RuntimeError("broken callback")

        dispatcher = ShortcutDispatcher(source)
        dispatcher.start(ShortcutBindings(on_ctrl_g=broken, on_alt_g=recorder("alt-g")))

        event = source.emit("g", ctrl=True, alt=True)
        assert recorder.calls == ["alt-g"]
        assert event.default_prevented
        assert "ctrl-g" in caplog.text
