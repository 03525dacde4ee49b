import random

from tredcental.constants import AVAILABLE_GEAR
from tredcental.services.cart import Cart


def test_add_same_gear_twice_single_entry(tent):
    cart = Cart()
    cart.add(tent)
    cart.add(tent)
    assert len(cart) == 1
    assert cart.get(tent.id).quantity == 2


def test_add_keeps_insertion_order(tent, sleeping_bag):
    cart = Cart()
    cart.add(sleeping_bag)
    cart.add(tent)
    cart.add(sleeping_bag)
    assert [it.id for it in cart.items()] == [sleeping_bag.id, tent.id]


def test_set_quantity_updates(tent):
    cart = Cart()
    cart.add(tent)
    cart.set_quantity(tent.id, 5)
    assert cart.get(tent.id).quantity == 5


def test_set_quantity_zero_or_negative_removes(tent, sleeping_bag):
    cart = Cart()
    cart.add(tent)
    cart.add(sleeping_bag)
    cart.set_quantity(tent.id, 0)
    cart.set_quantity(sleeping_bag.id, -3)
    assert cart.is_empty


def test_set_quantity_absent_id_is_noop(tent):
    cart = Cart()
    cart.add(tent)
    cart.set_quantity(999, 4)
    assert [(it.id, it.quantity) for it in cart.items()] == [(tent.id, 1)]


def test_remove_is_idempotent(tent):
    cart = Cart()
    cart.add(tent)
    cart.remove(tent.id)
    cart.remove(tent.id)
    assert cart.is_empty


def test_items_is_a_snapshot(tent):
    cart = Cart()
    cart.add(tent)
    snapshot = cart.items()
    cart.clear()
    assert len(snapshot) == 1
    assert len(cart) == 0


def test_random_operations_keep_invariants():
    rnd = random.Random(1234)
    cart = Cart()
    for _ in range(500):
        g = rnd.choice(AVAILABLE_GEAR)
        op = rnd.choice(("add", "set", "remove"))
        if op == "add":
            cart.add(g)
        elif op == "set":
            cart.set_quantity(g.id, rnd.randint(-2, 5))
        else:
            cart.remove(g.id)

        ids = [it.id for it in cart.items()]
        assert len(ids) == len(set(ids))
        assert all(it.quantity >= 1 for it in cart.items())
