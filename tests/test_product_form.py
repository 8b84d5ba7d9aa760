import unittest

from pydantic import ValidationError

from models.product import Product
from models.product_form import ProductForm, optional_amount, parse_amount


class TestParseAmount(unittest.TestCase):
    def test_comma_decimal(self):
        self.assertEqual(parse_amount("4,50"), 4.5)
        self.assertEqual(parse_amount(" 3.2 "), 3.2)
        self.assertEqual(parse_amount(7), 7.0)

    def test_optional_amount(self):
        self.assertEqual(optional_amount(""), 0.0)
        self.assertEqual(optional_amount("2,5"), 2.5)
        self.assertIsNone(optional_amount("abc"))
        self.assertIsNone(optional_amount("-1"))
        self.assertIsNone(optional_amount(float("nan")))

    def test_non_finite_amounts_are_rejected(self):
        self.assertIsNone(optional_amount("inf"))
        self.assertIsNone(optional_amount(float("-inf")))
        with self.assertRaises(ValueError):
            parse_amount("Infinity")


class TestProductForm(unittest.TestCase):
    def test_blank_numbers_get_defaults(self):
        form = ProductForm(name="Rice", quantity="", unit_price="  ")
        self.assertEqual(form.quantity, 1)
        self.assertEqual(form.unit_price, 0)

    def test_whitespace_is_stripped(self):
        form = ProductForm(name="  Rice ", brand=" Tio João ", aisle=None)
        self.assertEqual(form.name, "Rice")
        self.assertEqual(form.brand, "Tio João")
        self.assertEqual(form.aisle, "")

    def test_name_is_required(self):
        with self.assertRaises(ValidationError):
            ProductForm(name="   ")

    def test_quantity_must_be_positive(self):
        with self.assertRaises(ValidationError):
            ProductForm(name="Rice", quantity="0")

    def test_price_cannot_be_negative(self):
        with self.assertRaises(ValidationError):
            ProductForm(name="Rice", unit_price="-3")

    def test_non_numeric_price_is_rejected(self):
        with self.assertRaises(ValidationError):
            ProductForm(name="Rice", unit_price="cheap")

    def test_non_finite_numbers_are_rejected(self):
        with self.assertRaises(ValidationError):
            ProductForm(name="Rice", unit_price="inf")
        with self.assertRaises(ValidationError):
            ProductForm(name="Rice", quantity="nan")

    def test_to_fields_fills_defaults(self):
        fields = ProductForm(name="Rice", unit_price="5,90").to_fields("Geral")
        self.assertEqual(fields, {
            "name": "Rice",
            "brand": None,
            "category": "Geral",
            "aisle": None,
            "quantity": 1,
            "unit_price": 5.9,
        })

    def test_initial_values_for_edit(self):
        product = Product(id=1, name="Rice", brand=None, category=None, quantity=2, unit_price=0)
        values = ProductForm.initial_values(product, "Geral")
        self.assertEqual(values["brand"], "")
        self.assertEqual(values["category"], "Geral")
        self.assertEqual(values["quantity"], 2)
        self.assertEqual(values["unit_price"], "")

    def test_blank_form(self):
        values = ProductForm.blank("Limpeza")
        self.assertEqual(values["category"], "Limpeza")
        self.assertEqual(values["quantity"], 1)


if __name__ == '__main__':
    unittest.main()
