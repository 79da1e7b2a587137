"""全局快捷键分发模块

快捷键绑定是固定的 12 个：F1~F9、Ctrl+G、Alt+R、Alt+G。

分发器不依赖具体的 UI 框架，只依赖一个事件源（``EventSource``），
Qt 下由 ``tallyboard.ui.key_source.QtKeyEventSource`` 提供。

匹配规则以声明式规则表的形式给出，每个事件都会逐条评估全部规则：
阻止默认行为（suppress）与回调分发相互独立，同一事件可以命中多条规则。

两处历史行为保持原样：
- 所有以 "F" 开头的按键都会被阻止默认行为（包括 F10~F12，即使没有回调）
- Alt+G 的阻止规则匹配大写 "G"，分发规则却匹配小写 "g"；
  可通过 ``fix_alt_g_case=True`` 修正
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Final, Iterator, List, Optional, Protocol

logger: Final = logging.getLogger(__name__)

Callback = Callable[[], None]


@dataclass
class KeyPress:
    """按键事件（与具体 UI 框架无关）"""
    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    default_prevented: bool = False

    def prevent_default(self) -> None:
        """阻止宿主的默认处理"""
        self.default_prevented = True


KeyHandler = Callable[[KeyPress], None]


class EventSource(Protocol):
    """宿主按键事件源"""

    def subscribe(self, handler: KeyHandler) -> None: ...

    def unsubscribe(self, handler: KeyHandler) -> None: ...


@dataclass
class ShortcutBindings:
    """快捷键回调（每个槽位可为空）"""
    on_f1: Optional[Callback] = None
    on_f2: Optional[Callback] = None
    on_f3: Optional[Callback] = None
    on_f4: Optional[Callback] = None
    on_f5: Optional[Callback] = None
    on_f6: Optional[Callback] = None
    on_f7: Optional[Callback] = None
    on_f8: Optional[Callback] = None
    on_f9: Optional[Callback] = None
    on_ctrl_g: Optional[Callback] = None
    on_alt_r: Optional[Callback] = None
    on_alt_g: Optional[Callback] = None


@dataclass(frozen=True)
class ShortcutRule:
    """规则表中的一行"""
    name: str
    predicate: Callable[[KeyPress], bool]
    suppress: bool = False
    slot: Optional[str] = None  # ShortcutBindings 中的字段名


def _function_key_rule(n: int) -> ShortcutRule:
    key = f"F{n}"
    return ShortcutRule(key, lambda e: e.key == key, slot=f"on_f{n}")


def build_rules(fix_alt_g_case: bool = False) -> List[ShortcutRule]:
    """构建按顺序评估的规则表"""
    if fix_alt_g_case:
        alt_suppress_keys = ("r", "g", "G")
        alt_g_keys = ("g", "G")
    else:
        alt_suppress_keys = ("r", "G")
        alt_g_keys = ("g",)

    rules = [
        # 阻止默认行为
        ShortcutRule("suppress-function-keys", lambda e: e.key.startswith("F"), suppress=True),
        ShortcutRule("suppress-ctrl-g", lambda e: e.ctrl and e.key == "g", suppress=True),
        ShortcutRule(
            "suppress-alt-keys",
            lambda e: e.alt and e.key in alt_suppress_keys,
            suppress=True,
        ),
    ]
    # 功能键分发（精确匹配）
    rules.extend(_function_key_rule(n) for n in range(1, 10))
    rules.extend([
        ShortcutRule("ctrl-g", lambda e: e.ctrl and e.key == "g", slot="on_ctrl_g"),
        ShortcutRule("alt-r", lambda e: e.alt and e.key == "r", slot="on_alt_r"),
        ShortcutRule("alt-g", lambda e: e.alt and e.key in alt_g_keys, slot="on_alt_g"),
    ])
    return rules


class ShortcutDispatcher:
    """
    快捷键分发器

    生命周期内只向事件源注册一个处理函数：
    - ``start(bindings)`` 注册；重复调用会先注销旧的处理函数，不会叠加
    - ``stop()`` 注销，可重复调用
    - ``active(bindings)`` 上下文管理器，保证任何退出路径都会注销
    """

    def __init__(self, source: EventSource, fix_alt_g_case: bool = False):
        self._source = source
        self._rules = build_rules(fix_alt_g_case)
        self._handler: Optional[KeyHandler] = None

    @property
    def is_active(self) -> bool:
        return self._handler is not None

    def start(self, bindings: ShortcutBindings) -> None:
        """注册（或替换）快捷键绑定"""
        self.stop()
        # 每次注册使用新的处理函数，避免旧绑定残留
        handler: KeyHandler = lambda event: self._dispatch(event, bindings)
        self._source.subscribe(handler)
        self._handler = handler
        logger.debug("快捷键分发器已启动")

    def stop(self) -> None:
        """注销快捷键绑定"""
        if self._handler is None:
            return
        handler, self._handler = self._handler, None
        self._source.unsubscribe(handler)
        logger.debug("快捷键分发器已停止")

    @contextmanager
    def active(self, bindings: ShortcutBindings) -> Iterator["ShortcutDispatcher"]:
        """在 with 块内启用快捷键"""
        self.start(bindings)
        try:
            yield self
        finally:
            self.stop()

    def _dispatch(self, event: KeyPress, bindings: ShortcutBindings) -> None:
        for rule in self._rules:
            if not rule.predicate(event):
                continue
            if rule.suppress:
                event.prevent_default()
            if rule.slot is None:
                continue
            callback = getattr(bindings, rule.slot)
            if callback is None:
                continue
            try:
                callback()
            except Exception:
                logger.exception(f"快捷键回调执行失败: {rule.name}")
