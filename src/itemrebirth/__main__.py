"""Entry point: python -m itemrebirth [menu|export [DIR]]

- No args / "menu": Interactive item registry menu
- "export":         Write one markdown card per item (default dir from config)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from itemrebirth.config import ItemRebirthConfig, load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _run_menu(config: ItemRebirthConfig) -> int:
    """Interactive menu mode."""
    from itemrebirth.connectors.cli import ConsoleApp
    from itemrebirth.registry.store import ItemStore

    store = ItemStore(config.data_file)
    app = ConsoleApp(store, clear_screen=config.clear_screen, pause=config.pause)
    return app.run()


def _run_export(config: ItemRebirthConfig, target: str | None) -> int:
    """Export item cards."""
    from itemrebirth.registry.cards import export_cards
    from itemrebirth.registry.store import ItemStore

    store = ItemStore(config.data_file)
    directory = Path(target) if target else config.export_dir
    written = export_cards(store, directory)
    print(f"已导出 {len(written)} 张物品卡片到 {directory}")
    return 0


def _usage() -> None:
    print("Usage: python -m itemrebirth [menu|export [DIR]]")
    print("  menu    — Interactive item registry (default)")
    print("  export  — Write markdown item cards to DIR")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    cmd = args[0] if args else "menu"

    config = load_config()
    _setup_logging(config.log_level)

    if cmd == "menu":
        return _run_menu(config)
    if cmd == "export":
        return _run_export(config, args[1] if len(args) > 1 else None)
    _usage()
    return 1


if __name__ == "__main__":
    sys.exit(main())
