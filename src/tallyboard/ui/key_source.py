"""Qt 按键事件源模块 - 将 QKeyEvent 转换为 KeyPress 并交给快捷键分发器"""
import logging
from typing import Final, List, Optional, Tuple

from PySide6.QtCore import QCoreApplication, QObject, QEvent, Qt
from PySide6.QtGui import QKeyEvent, QKeySequence

from tallyboard.shortcuts import KeyHandler, KeyPress

logger: Final = logging.getLogger(__name__)

_KEY_F1: Final = Qt.Key.Key_F1.value
_KEY_F35: Final = Qt.Key.Key_F35.value
_KEY_A: Final = Qt.Key.Key_A.value
_KEY_Z: Final = Qt.Key.Key_Z.value


def key_name(event: QKeyEvent) -> str:
    """
    获取按键标识

    - 功能键：F1 ~ F35
    - 字母键：按 Shift 状态区分大小写（Ctrl 组合下 text() 为控制字符，不能直接使用）
    - 其他：优先使用 text()，否则使用 QKeySequence 名称
    """
    key = event.key()
    if _KEY_F1 <= key <= _KEY_F35:
        return f"F{key - _KEY_F1 + 1}"
    if _KEY_A <= key <= _KEY_Z:
        letter = chr(key)
        shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        return letter.upper() if shift else letter.lower()

    text = event.text()
    if text and text.isprintable():
        return text
    name = QKeySequence(key).toString()
    return name or "Unidentified"


def to_key_press(event: QKeyEvent) -> KeyPress:
    """QKeyEvent -> KeyPress"""
    modifiers = event.modifiers()
    return KeyPress(
        key=key_name(event),
        ctrl=bool(modifiers & Qt.KeyboardModifier.ControlModifier),
        alt=bool(modifiers & Qt.KeyboardModifier.AltModifier),
        shift=bool(modifiers & Qt.KeyboardModifier.ShiftModifier),
    )


def _is_ancestor(ancestor: QObject, obj: Optional[QObject]) -> bool:
    """ancestor 是否为 obj 本身或其父对象"""
    while obj is not None:
        if obj is ancestor:
            return True
        obj = obj.parent()
    return False


class QtKeyEventSource(QObject):
    """
    基于应用程序事件过滤器的按键事件源

    第一个处理函数注册时向 QApplication 安装事件过滤器，最后一个注销时移除；
    没有 QApplication 时退回到 target 本身。只处理接收者为 target 或其子控件的
    按键，因此输入框获得焦点时快捷键同样生效。
    处理函数调用 prevent_default() 后，事件被消费，不再传递给接收控件。

    子控件忽略的按键会沿父控件链继续传递，同一次按键只分发一次。
    """

    def __init__(self, target: QObject, parent=None):
        super().__init__(parent)
        self._target = target
        self._handlers: List[KeyHandler] = []
        self._filter_owner: Optional[QObject] = None
        # 最近一次未被消费的按键：(接收者, key, modifiers)
        self._propagating: Optional[Tuple[QObject, int, Qt.KeyboardModifier]] = None

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: KeyHandler) -> None:
        self._handlers.append(handler)
        if self._filter_owner is None:
            self._filter_owner = QCoreApplication.instance() or self._target
            self._filter_owner.installEventFilter(self)

    def unsubscribe(self, handler: KeyHandler) -> None:
        if handler not in self._handlers:
            return
        self._handlers.remove(handler)
        if not self._handlers and self._filter_owner is not None:
            self._filter_owner.removeEventFilter(self)
            self._filter_owner = None
            self._propagating = None

    def _is_propagation(self, watched: QObject, event: QKeyEvent) -> bool:
        """是否为上一次按键传递到父控件"""
        if self._propagating is None:
            return False
        receiver, key, modifiers = self._propagating
        if watched is receiver or (event.key(), event.modifiers()) != (key, modifiers):
            return False
        return _is_ancestor(watched, receiver.parent())

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        event_type = event.type()
        if event_type == QEvent.Type.KeyRelease:
            self._propagating = None
            return False
        if event_type != QEvent.Type.KeyPress or not _is_ancestor(self._target, watched):
            return False

        if self._is_propagation(watched, event):
            self._propagating = (watched, event.key(), event.modifiers())
            return False

        key_press = to_key_press(event)
        for handler in list(self._handlers):
            handler(key_press)
        if key_press.default_prevented:
            self._propagating = None
            logger.debug(f"按键已拦截: {key_press.key}")
            return True

        self._propagating = (watched, event.key(), event.modifiers())
        return False
