"""Interactive console menu over the item store."""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Callable, TextIO

from itemrebirth.errors import StoreWriteError
from itemrebirth.registry.store import CONTACT_LABEL, DESCRIPTION_LABEL, NAME_LABEL

if TYPE_CHECKING:
    from itemrebirth.registry.store import Item, ItemStore

logger = logging.getLogger(__name__)

EXIT_CHOICE = 5

MENU = (
    "\n--- 物品“复活”程序 ---\n"
    "1. 添加物品\n"
    "2. 删除物品\n"
    "3. 显示所有物品\n"
    "4. 查找物品\n"
    "5. 退出"
)

_CLEAR = "\033[2J\033[H"
_RULE = "-" * 28
_LEADING_INT = re.compile(r"[+-]?\d+", re.ASCII)


class _EndOfInput(Exception):
    """stdin closed while the loop was waiting for a line."""


def _read_stdin() -> str | None:
    raw = sys.stdin.buffer.readline()
    if not raw:
        return None
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


class ConsoleApp:
    """Menu loop: show menu → read choice → dispatch → show result → pause."""

    def __init__(
        self,
        store: ItemStore,
        *,
        read_line: Callable[[], str | None] | None = None,
        output: TextIO | None = None,
        clear_screen: bool = True,
        pause: bool = True,
    ) -> None:
        self.store = store
        self._read_line = read_line or _read_stdin
        self._out = output or sys.stdout
        self._clear_screen = clear_screen
        self._pause = pause
        self._handlers: dict[int, Callable[[], None]] = {
            1: self._add,
            2: self._delete,
            3: self._display,
            4: self._search,
            EXIT_CHOICE: self._exit,
        }

    def run(self) -> int:
        """Run until the user exits. Returns the process exit status."""
        choice = None
        try:
            while True:
                self._clear()
                self._print(MENU)
                choice = self._read_choice()
                handler = self._handlers.get(choice)
                if handler is None:
                    self._print("无效选择，请重新输入。")
                else:
                    try:
                        handler()
                    except ValueError as exc:
                        self._print(f"输入无效：{exc}")
                    except StoreWriteError as exc:
                        self._print(f"保存失败！{exc}")
                self._wait_for_key()
                if choice == EXIT_CHOICE:
                    return 0
        except (_EndOfInput, KeyboardInterrupt):
            if choice != EXIT_CHOICE:
                self._print("\n退出程序。")
            return 0

    # ── Input helpers ─────────────────────────────────────────

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _prompt(self, text: str) -> str:
        self._out.write(text)
        self._out.flush()
        line = self._read_line()
        if line is None:
            raise _EndOfInput
        return line

    def _read_choice(self) -> int:
        """Prompt until the line starts with an integer; trailing text is ignored."""
        while True:
            line = self._prompt("请选择操作：").strip()
            if not line:
                continue
            match = _LEADING_INT.match(line)
            if match:
                return int(match.group())
            logger.debug("Rejected menu input %r", line)
            self._print("无效输入，请输入一个数字！")

    def _wait_for_key(self) -> None:
        if not self._pause:
            return
        self._print("按任意键继续...")
        if self._read_line() is None:
            raise _EndOfInput

    def _clear(self) -> None:
        if self._clear_screen and self._out.isatty():
            self._out.write(_CLEAR)

    def _print_item(self, item: Item) -> None:
        self._print(f"{NAME_LABEL}{item.name}")
        self._print(f"{DESCRIPTION_LABEL}{item.description}")
        self._print(f"{CONTACT_LABEL}{item.contact_info}")

    # ── Menu actions ──────────────────────────────────────────

    def _add(self) -> None:
        name = self._prompt("输入物品名称: ")
        description = self._prompt("输入物品描述: ")
        contact_info = self._prompt("输入联系人信息: ")
        self.store.add(name, description, contact_info)
        self._print("物品添加成功！")

    def _delete(self) -> None:
        name = self._prompt("输入要删除的物品名称: ")
        if self.store.delete(name) is None:
            self._print("未找到该物品！")
        else:
            self._print("物品删除成功！")

    def _display(self) -> None:
        if not len(self.store):
            self._print("目前没有物品可供展示！")
            return
        self._print("物品列表：")
        for item in self.store.list():
            self._print_item(item)
            self._print(_RULE)

    def _search(self) -> None:
        name = self._prompt("输入要查找的物品名称: ")
        item = self.store.search(name)
        if item is None:
            self._print("未找到该物品！")
            return
        self._print("找到物品：")
        self._print_item(item)

    def _exit(self) -> None:
        self._print("退出程序。")
