import pytest

from circq.core.contracts import Item
from circq.core.ids import IdGenerator, generate_item


def test_generator_is_monotonic():
    gen = IdGenerator()
    ids = [gen.generate_item().id for _ in range(10)]
    assert ids == list(range(1, 11))
    assert gen.peek() == 11


def test_process_wide_generate_item_increases():
    a = generate_item()
    b = generate_item()
    assert isinstance(a, Item)
    assert b.id == a.id + 1


@pytest.mark.parametrize("start", [0, -3, "1"])
def test_generator_rejects_bad_start(start):
    with pytest.raises(ValueError):
        IdGenerator(start)
