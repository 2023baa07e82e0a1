# src/circq/driver.py
from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Optional, TextIO

from circq.config import load_config
from circq.core import log
from circq.core.circular_queue import CircularQueue
from circq.core.errors import QueueError
from circq.core.ids import IdGenerator
from circq.core.metrics import force_emit
from circq.core.render import render

logger = log.get("circq.driver")

OPT_VIEW, OPT_DEQUEUE, OPT_ENQUEUE, OPT_EXIT = 1, 2, 3, 4

BANNER = "=" * 40
RULE = "-" * 40

Handler = Callable[[], bool]


def parse_selection(line: str) -> Optional[int]:
    """Menu choice as int, or None when the line is not a number."""
    try:
        return int(line.strip())
    except (TypeError, ValueError):
        return None


class MenuDriver:
    """Interactive loop: view / dequeue / enqueue / exit over one queue."""

    def __init__(self, queue: CircularQueue, input_fn: Callable[[str], str] = input,
                 out: Optional[TextIO] = None):
        self.queue = queue
        self.input_fn = input_fn
        self.out = out if out is not None else sys.stdout
        self.routes: Dict[int, Handler] = {
            OPT_VIEW: self.view,
            OPT_DEQUEUE: self.dequeue,
            OPT_ENQUEUE: self.enqueue,
            OPT_EXIT: self.exit,
        }

    def _print(self, text: str = "") -> None:
        self.out.write(text + "\n")

    # -------------------- Menu --------------------
    def render_menu(self) -> str:
        return "\n".join([
            "",
            BANNER,
            f"   CIRCULAR QUEUE SIMULATOR (CAP: {self.queue.capacity})   ",
            BANNER,
            "1. View queue",
            "2. Dequeue (remove from front)",
            "3. Enqueue new item (at back)",
            "4. Exit",
            RULE,
        ])

    # -------------------- Handlers --------------------
    def view(self) -> bool:
        self._print()
        self._print(render(self.queue.state()))
        return True

    def dequeue(self) -> bool:
        try:
            item_id = self.queue.dequeue()
        except QueueError as e:
            self._report(e)
            return True
        self._print(f"\nRemoved item from the front. ID: {item_id}")
        return self.view()

    def enqueue(self) -> bool:
        try:
            item_id = self.queue.enqueue()
        except QueueError as e:
            self._report(e)
            return True
        self._print(f"\nInserted new item at the back. ID: {item_id}")
        return self.view()

    def exit(self) -> bool:
        self._print("\nShutting down the simulation. Bye!")
        return False

    def _report(self, e: QueueError) -> None:
        logger.info(f"rejected: {e}")
        self._print(f"\nERROR: {e}")

    # -------------------- Loop --------------------
    def handle(self, option: int) -> bool:
        h = self.routes.get(option)
        if h is None:
            self._print("\nInvalid option. Try again.")
            return True
        return h()

    def run(self) -> None:
        self._print("Initial queue state:")
        self.view()
        while True:
            self._print(self.render_menu())
            try:
                line = self.input_fn("Choose an option: ")
            except EOFError:
                self._print()
                logger.info("input closed; leaving menu loop")
                break
            option = parse_selection(line)
            if option is None:
                self._print("\nInvalid input. Please type a number from 1 to 4.")
                continue
            if not self.handle(option):
                break


def make_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="circq", description="Circular queue simulator")
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--capacity", type=int, default=None, help="queue capacity (default 5)")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    p.add_argument("--log-json", action="store_true", default=None, help="JSON log lines")
    return p


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input,
         out: Optional[TextIO] = None) -> int:
    args = make_parser().parse_args(argv)
    try:
        cfg = load_config(args.config, capacity=args.capacity,
                          log_level=args.log_level, log_json=args.log_json)
    except ValueError as e:
        log.setup(args.log_level, stream=sys.stderr, default_level="WARNING")
        logger.error(f"invalid configuration: {e}")
        return 2

    # stdout belongs to the menu transcript; logs go to stderr and stay quiet unless asked for
    log.setup(cfg.log_level, cfg.log_json, stream=sys.stderr, default_level="WARNING")
    q = CircularQueue.initialize(cfg.capacity, IdGenerator(cfg.id_start), name=cfg.name)
    MenuDriver(q, input_fn=input_fn, out=out).run()
    force_emit(log.get("metrics"), json_mode=bool(cfg.log_json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
