import unittest

from models.product import Product
from services.list_pipeline import (
    ALL_CATEGORIES,
    NO_AISLE_RANK,
    aisle_rank,
    category_registry,
    compute_totals,
    filter_products,
)


def make(pid, name, **kwargs):
    return Product(id=pid, name=name, **kwargs)


class TestAisleRank(unittest.TestCase):
    def test_numeric_aisles(self):
        self.assertEqual(aisle_rank("7"), 7)
        self.assertEqual(aisle_rank(" 12 "), 12)
        self.assertEqual(aisle_rank("0"), 0)

    def test_leading_integer_is_used(self):
        self.assertEqual(aisle_rank("12B"), 12)

    def test_missing_or_text_aisle_ranks_last(self):
        self.assertEqual(aisle_rank(None), NO_AISLE_RANK)
        self.assertEqual(aisle_rank(""), NO_AISLE_RANK)
        self.assertEqual(aisle_rank("Bakery"), NO_AISLE_RANK)


class TestFilterProducts(unittest.TestCase):
    def setUp(self):
        self.milk = make(1, "Milk", aisle="5", quantity=4, unit_price=2, to_buy=True)
        self.bread = make(2, "Bread", aisle="2", quantity=1, unit_price=3, to_buy=True, in_cart=True)
        self.soap = make(3, "Soap", brand="Dove", category="Higiene", aisle="9")
        self.products = [self.bread, self.soap, self.milk]

    def test_shopping_mode_puts_uncollected_first_then_by_aisle(self):
        result = filter_products(self.products, shopping_mode=True)
        self.assertEqual([p.name for p in result], ["Milk", "Bread"])

    def test_shopping_mode_orders_by_aisle_and_unknown_aisles_last(self):
        products = [
            make(1, "A", aisle="Bakery", to_buy=True),
            make(2, "B", aisle="10", to_buy=True),
            make(3, "C", aisle="3", to_buy=True),
            make(4, "D", to_buy=True),
        ]
        result = filter_products(products, shopping_mode=True)
        self.assertEqual([p.name for p in result[:2]], ["C", "B"])
        self.assertEqual({p.name for p in result[2:]}, {"A", "D"})

    def test_shopping_mode_orders_aisles_within_each_cart_group(self):
        products = [
            make(1, "x", aisle="7", to_buy=True, in_cart=True),
            make(2, "y", aisle="Bakery", to_buy=True, in_cart=True),
            make(3, "z", aisle="1", to_buy=True, in_cart=True),
            make(4, "a", aisle="9", to_buy=True),
            make(5, "b", to_buy=True),
            make(6, "c", aisle="3", to_buy=True),
        ]
        result = filter_products(products, shopping_mode=True)
        self.assertEqual([p.name for p in result], ["c", "a", "b", "z", "x", "y"])

        for in_cart in (False, True):
            ranks = [aisle_rank(p.aisle) for p in result if p.in_cart == in_cart]
            self.assertEqual(ranks, sorted(ranks))
            self.assertEqual(ranks[-1], NO_AISLE_RANK)

    def test_stale_in_cart_without_to_buy_is_hidden_while_shopping(self):
        stale = make(1, "Eggs", aisle="1", in_cart=True)
        milk = make(2, "Milk", aisle="5", to_buy=True)
        result = filter_products([stale, milk], shopping_mode=True)
        self.assertEqual(result, [milk])

    def test_shopping_mode_hides_products_not_to_buy(self):
        result = filter_products(self.products, shopping_mode=True)
        self.assertNotIn(self.soap, result)

    def test_planning_mode_is_alphabetical_and_keeps_everything(self):
        result = filter_products(self.products)
        self.assertEqual([p.name for p in result], ["Bread", "Milk", "Soap"])

    def test_planning_sort_ignores_case_and_accents(self):
        products = [make(1, "Banana"), make(2, "arroz"), make(3, "água")]
        result = filter_products(products)
        self.assertEqual([p.name for p in result], ["água", "arroz", "Banana"])

    def test_search_matches_name_or_brand_case_insensitively(self):
        self.assertEqual(filter_products(self.products, search_term="MIL"), [self.milk])
        self.assertEqual(filter_products(self.products, search_term="dove"), [self.soap])
        self.assertEqual(filter_products(self.products, search_term="xyz"), [])

    def test_category_filter_applies_in_planning_mode(self):
        result = filter_products(self.products, category_filter="Higiene")
        self.assertEqual(result, [self.soap])

    def test_category_filter_ignored_in_shopping_mode(self):
        result = filter_products(self.products, category_filter="Higiene", shopping_mode=True)
        self.assertEqual([p.name for p in result], ["Milk", "Bread"])

    def test_all_categories_sentinel_keeps_everything(self):
        result = filter_products(self.products, category_filter=ALL_CATEGORIES)
        self.assertEqual(len(result), 3)

    def test_input_is_not_mutated(self):
        original = list(self.products)
        filter_products(self.products, shopping_mode=True)
        filter_products(self.products)
        self.assertEqual(self.products, original)


class TestComputeTotals(unittest.TestCase):
    def test_base_and_cart_totals(self):
        products = [
            make(1, "Milk", quantity=4, unit_price=2, to_buy=True),
            make(2, "Bread", quantity=1, unit_price=3, to_buy=True, in_cart=True),
            make(3, "Soap", quantity=2, unit_price=5),
        ]
        totals = compute_totals(products, margin_pct=0)
        self.assertAlmostEqual(totals.base_total, 11)
        self.assertAlmostEqual(totals.cart_total, 3)
        self.assertAlmostEqual(totals.marked_up_total, 11)

    def test_margin_is_applied_to_base_total(self):
        totals = compute_totals([make(1, "Rice", unit_price=100, to_buy=True)], margin_pct=20)
        self.assertAlmostEqual(totals.marked_up_total, 120)

    def test_in_cart_without_to_buy_is_not_counted(self):
        totals = compute_totals([make(1, "Eggs", unit_price=10, in_cart=True)], margin_pct=15)
        self.assertEqual(totals.cart_total, 0)
        self.assertEqual(totals.base_total, 0)

    def test_empty_collection(self):
        totals = compute_totals([], margin_pct=15)
        self.assertEqual((totals.base_total, totals.cart_total, totals.marked_up_total), (0, 0, 0))


class TestCategoryRegistry(unittest.TestCase):
    def test_defaults_plus_categories_in_use_sorted_once(self):
        products = [
            make(1, "Chips", category="Snacks"),
            make(2, "Nuts", category="Snacks"),
            make(3, "Rice", category="Geral"),
            make(4, "Loose"),
        ]
        result = category_registry(products, ["Limpeza", "Geral"])
        self.assertEqual(result, ["Geral", "Limpeza", "Snacks"])


if __name__ == '__main__':
    unittest.main()
