"""Order-taker prompts (persona, behaviour rules, menu)"""

from __future__ import annotations
from textwrap import dedent

DELIVERY_FEE = 5.00

# (item, details, sizes-or-price). Sizes are (label, price) pairs in menu order.
MENU: dict[str, list[tuple]] = {
    "Pizzas": [
        (
            "Pepperoni Pizza",
            "tomato sauce, shredded mozzarella cheese, and pepperoni",
            [("Large", 12.95), ("Medium", 10.00), ("Small", 7.00)],
        ),
        (
            "Cheese Pizza",
            "tomato sauce, shredded mozzarella cheese, and cheddar cheese",
            [("Large", 10.95), ("Medium", 9.25), ("Small", 6.50)],
        ),
        (
            "Eggplant Pizza",
            "tomato sauce and eggplant",
            [("Large", 11.95), ("Medium", 9.75), ("Small", 6.75)],
        ),
    ],
    "Sides": [
        ("fries", None, [("medium", 4.50), ("small", 3.50)]),
        ("greek salad", None, 7.25),
    ],
    "Toppings": [
        ("extra cheese", None, 2.00),
        ("mushrooms", None, 1.50),
        ("sausage", None, 3.00),
        ("canadian bacon", None, 3.50),
        ("AI sauce", None, 1.50),
        ("peppers", None, 1.00),
    ],
    "Drinks": [
        ("coca-cola", None, [("2L", 3.00), ("1L", 2.00), ("330ml", 1.00)]),
        ("sprite", None, [("2L", 3.00), ("1L", 2.00), ("330ml", 1.00)]),
        ("bottled water 500ml", None, 2.50),
    ],
}


def _money(value: float) -> str:
    return f"${value:.2f}"


def render_menu(menu: dict[str, list[tuple]] = MENU) -> str:
    lines: list[str] = []
    for section, items in menu.items():
        lines.append(f"{section}:")
        for name, details, pricing in items:
            if isinstance(pricing, list):
                lines.append(f"- {name}:")
                if details:
                    lines.append(f"  - Ingredients: {details}")
                sizes = ", ".join(f"{label} {_money(p)}" for label, p in pricing)
                lines.append(f"  - Sizes: {sizes}")
            else:
                lines.append(f"- {name} {_money(pricing)}")
        lines.append("")
    return "\n".join(lines).rstrip()


def build_order_taker_system(*, delivery_fee: float = DELIVERY_FEE) -> str:
    core = dedent(
        f"""\
        You are Pizza AI, an automated service that collects orders for a pizza restaurant.
        You are not allowed to speak on any other topic.
        You first greet the customer, then collect the order, and then ask if it's a pickup or delivery.
        The user is not allowed to ask for anything outside of the menu.
        You wait to collect the entire order, then summarize it and check for a final time if the customer wants to add anything else.
        If it's a delivery, you ask for an address, and add {_money(delivery_fee)} to the final price.
        Before finishing, you confirm the entire order and the final price of the order. Make sure to calculate correctly the final price.
        Finally you collect the payment.
        Make sure to clarify all options, extras and sizes to uniquely identify the item from the menu.
        You respond in a short, very conversational friendly style.

        The menu includes:
        """
    )
    return core + render_menu() + "\n"
