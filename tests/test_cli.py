"""Tests for the console menu loop."""

from __future__ import annotations

import io

import pytest
from pathlib import Path

from itemrebirth.connectors.cli import ConsoleApp
from itemrebirth.registry.store import Item, ItemStore


def scripted(*lines: str):
    """read_line stand-in: yields the given lines, then None (EOF)."""
    it = iter(lines)
    return lambda: next(it, None)


@pytest.fixture
def store(tmp_path: Path) -> ItemStore:
    return ItemStore(tmp_path / "items.txt")


def run_app(store: ItemStore, *lines: str, pause: bool = False) -> tuple[int, str]:
    out = io.StringIO()
    app = ConsoleApp(store, read_line=scripted(*lines), output=out, pause=pause)
    status = app.run()
    return status, out.getvalue()


class TestMenuLoop:
    def test_exit_returns_zero(self, store: ItemStore):
        status, output = run_app(store, "5")
        assert status == 0
        assert "--- 物品“复活”程序 ---" in output
        assert "退出程序。" in output

    def test_non_numeric_reprompts(self, store: ItemStore):
        status, output = run_app(store, "abc", "5")
        assert status == 0
        assert output.count("无效输入，请输入一个数字！") == 1
        # Menu drawn once; the bad input re-prompts without redrawing
        assert output.count("1. 添加物品") == 1
        assert output.count("请选择操作：") == 2

    def test_blank_line_reprompts_silently(self, store: ItemStore):
        _, output = run_app(store, "", "  ", "5")
        assert "无效输入" not in output

    def test_leading_number_is_read(self, store: ItemStore):
        _, output = run_app(store, "3abc", " 5 please")
        assert "无效输入" not in output
        assert "目前没有物品可供展示！" in output
        assert "退出程序。" in output

    def test_full_width_digits_rejected(self, store: ItemStore):
        _, output = run_app(store, "３", "5")
        assert output.count("无效输入，请输入一个数字！") == 1
        assert "目前没有物品可供展示！" not in output

    def test_unmapped_choice(self, store: ItemStore):
        _, output = run_app(store, "9", "0", "5")
        assert output.count("无效选择，请重新输入。") == 2
        assert output.count("1. 添加物品") == 3

    def test_eof_ends_cleanly(self, store: ItemStore):
        status, output = run_app(store, "1", "Wallet")
        assert status == 0
        assert len(store) == 0
        assert "退出程序。" in output

    def test_pause_waits_for_key(self, store: ItemStore):
        status, output = run_app(store, "3", "", "5", "", pause=True)
        assert status == 0
        assert output.count("按任意键继续...") == 2

    def test_eof_during_pause(self, store: ItemStore):
        status, _ = run_app(store, "3", pause=True)
        assert status == 0

    def test_eof_at_exit_pause_prints_goodbye_once(self, store: ItemStore):
        status, output = run_app(store, "5", pause=True)
        assert status == 0
        assert output.count("退出程序。") == 1

    def test_no_clear_sequence_when_not_a_tty(self, store: ItemStore):
        _, output = run_app(store, "5")
        assert "\033[2J" not in output


class TestMenuActions:
    def test_add_then_list(self, store: ItemStore):
        _, output = run_app(store, "1", "Wallet", "Black leather", "555-1234", "3", "5")
        assert "物品添加成功！" in output
        assert "物品列表：" in output
        assert "物品名称: Wallet" in output
        assert "物品描述: Black leather" in output
        assert "联系人信息: 555-1234" in output
        assert list(store.list()) == [Item("Wallet", "Black leather", "555-1234")]

    def test_list_empty(self, store: ItemStore):
        _, output = run_app(store, "3", "5")
        assert "目前没有物品可供展示！" in output

    def test_delete_then_list_empty(self, store: ItemStore):
        store.add("Wallet", "Black leather", "555-1234")
        _, output = run_app(store, "2", "Wallet", "3", "5")
        assert "物品删除成功！" in output
        assert "目前没有物品可供展示！" in output

    def test_delete_missing(self, store: ItemStore):
        _, output = run_app(store, "2", "Keys", "5")
        assert "未找到该物品！" in output

    def test_search_found(self, store: ItemStore):
        store.add("Keys", "Three keys", "555-0000")
        _, output = run_app(store, "4", "Keys", "5")
        assert "找到物品：" in output
        assert "物品描述: Three keys" in output
        assert "联系人信息: 555-0000" in output

    def test_search_empty_store(self, store: ItemStore):
        _, output = run_app(store, "4", "Keys", "5")
        assert "未找到该物品！" in output

    def test_write_failure_is_reported(self, store: ItemStore):
        store.path.mkdir()
        status, output = run_app(store, "1", "Wallet", "x", "y", "5")
        assert status == 0
        assert "保存失败！" in output
        assert "物品添加成功！" not in output

    def test_failed_delete_keeps_item_listed(self, store: ItemStore):
        store.add("Wallet", "Black leather", "555-1234")
        store.path.unlink()
        store.path.mkdir()
        _, output = run_app(store, "2", "Wallet", "3", "5")
        assert "保存失败！" in output
        assert "物品删除成功！" not in output
        assert "物品名称: Wallet" in output
