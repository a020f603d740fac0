from __future__ import annotations

import time


class Customer:
    def __init__(self, name: str, email: str) -> None:
        self.name = name
        self.email = email
        self.orders: list[Order] = []

    @property
    def order_count(self) -> int:
        return len(self.orders)


class Order:
    def __init__(self, number: int, customer: Customer, lines: dict[str, int]) -> None:
        self.number = number
        self.customer = customer
        self.lines = lines
        self.status = "open"
        self.total: float | None = None

    @property
    def summary(self) -> str:
        return f"#{self.number} for {self.customer.name}"

    @property
    def locked(self) -> bool:
        raise PermissionError("order is locked while being priced")


def sample_objects() -> dict[str, object]:
    alice = Customer("Alice", "alice@example.com")
    bob = Customer("Bob", "bob@example.com")
    first = Order(1001, alice, {"apples": 3, "pears": 2})
    second = Order(1002, bob, {"plums": 12})
    alice.orders.append(first)
    bob.orders.append(second)
    return {"alice": alice, "bob": bob, "first": first, "second": second}


def price_order(order: Order, delay: float = 0.5) -> float:
    time.sleep(delay)
    total = float(sum(order.lines.values())) * 1.25
    order.total = total
    order.status = "priced"
    return total
