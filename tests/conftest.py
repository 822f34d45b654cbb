import random

import pytest

MARKET_TRANSACTIONS = [
    ['beer', 'nuts', 'cheese'],
    ['beer', 'nuts', 'jam'],
    ['beer', 'butter'],
    ['nuts', 'cheese'],
    ['beer', 'nuts', 'cheese', 'jam'],
    ['butter'],
    ['beer', 'nuts', 'jam', 'butter'],
    ['jam'],
]

GROCERY_ITEMS = ['bread', 'milk', 'eggs', 'apples', 'coffee', 'tea', 'sugar', 'rice']


@pytest.fixture
def market_transactions():
    return [list(t) for t in MARKET_TRANSACTIONS]


@pytest.fixture
def grocery_transactions():
    """Seeded random baskets; bread and milk are deliberately correlated."""
    rng = random.Random(7)
    transactions = []
    for _ in range(60):
        basket = {item for item in GROCERY_ITEMS if rng.random() < 0.35}
        if 'bread' in basket and rng.random() < 0.8:
            basket.add('milk')
        transactions.append(sorted(basket))
    return transactions
