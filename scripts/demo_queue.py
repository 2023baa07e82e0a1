import argparse
import json

from circq.core import log
from circq.core.circular_queue import CircularQueue
from circq.core.errors import QueueError
from circq.core.ids import IdGenerator
from circq.core.metrics import force_emit
from circq.core.render import render

# scripted walk through full -> partial -> empty, no stdin needed
STEPS = ["enqueue", "dequeue", "enqueue", "dequeue", "dequeue", "dequeue", "dequeue", "dequeue", "dequeue"]


def make_parser():
    p = argparse.ArgumentParser(description="Non-interactive circular queue demo")
    p.add_argument("--capacity", type=int, default=5)
    p.add_argument("--steps", nargs="*", default=STEPS, choices=["enqueue", "dequeue", "view"])
    p.add_argument("--json", action="store_true", help="print each state as a JSON line")
    return p


def show(q: CircularQueue, as_json: bool) -> None:
    state = q.state()
    print(json.dumps(state.to_dict()) if as_json else render(state))


def main():
    args = make_parser().parse_args()
    log.setup(json_mode=args.json or None)
    logger = log.get("demo")

    q = CircularQueue.initialize(args.capacity, IdGenerator())
    show(q, args.json)
    for step in args.steps:
        try:
            if step == "enqueue":
                logger.info(f"enqueue -> {q.enqueue()}")
            elif step == "dequeue":
                logger.info(f"dequeue -> {q.dequeue()}")
        except QueueError as e:
            logger.warning(f"{step} rejected: {e}")
        show(q, args.json)

    force_emit(json_mode=args.json)


if __name__ == "__main__":
    main()
