import json
import typing

import pytest

from ..arraylist import ArrayList
from ..exceptions import (
    InvalidAttributesError,
    RequiredAttributeMissingError,
    UnknownPropertyError,
)
from ..model import Model
from .testing import (
    Address,
    Customer,
    Invoice,
    Order,
    OrderItem,
    PlainResponseEnvelope,
)


class TestConstruction:
    def test_unset_attributes_read_as_none(self):
        order = Order()
        assert order.id is None
        assert order.number is None
        assert order.get("note") is None

    def test_unset_relations(self):
        order = Order()
        assert order.customer is None
        assert isinstance(order.items, ArrayList)
        assert len(order.items) == 0

    def test_many_slot_is_kept(self):
        order = Order()
        items = order.items
        order.items = [{"sku": "A"}]
        assert order.items is items

    def test_keyword_arguments(self):
        order = Order(number="1001", note="gift")
        assert order.number == "1001"
        assert order.note == "gift"

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            Model()

    def test_name(self):
        assert Order().get_name() == "Order"
        assert Invoice().get_name() == "invoice"


class TestWrite:
    def test_plain_attribute_last_write_wins(self):
        order = Order()
        order.number = "1"
        order.number = 2
        assert order.number == 2

    def test_none_is_ignored(self):
        order = Order(number="1")
        order.number = None
        assert order.number == "1"
        assert order.set_attribute("number", None) is True

    def test_links_key_is_ignored(self):
        order = Order()
        assert order.set_attribute("_links", {"self": {"href": "/orders/1"}}) is True
        order.set_attributes({"_links": [{"href": "/orders/1"}]})
        assert "_links" not in order.get_body()

    def test_one_relation_builds_target(self):
        order = Order()
        order.customer = {"id": 1, "email": "a@example.com"}
        assert isinstance(order.customer, Customer)
        assert order.customer.email == "a@example.com"

    def test_one_relation_accepts_nested_relations(self):
        customer = Customer(address={"street": "Main st 1", "city": "Utrecht"})
        assert isinstance(customer.address, Address)
        assert customer.address.city == "Utrecht"

    def test_many_relation_builds_targets(self):
        order = Order(items=[{"sku": "A", "quantity": 1}, {"sku": "B", "quantity": 2}])
        assert [type(item) for item in order.items] == [OrderItem, OrderItem]
        assert [item.sku for item in order.items] == ["A", "B"]

    def test_many_relation_from_keyed_mapping(self):
        order = Order(items={"0": {"sku": "A"}, "1": {"sku": "B"}})
        assert [type(item) for item in order.items] == [OrderItem, OrderItem]
        assert [item.sku for item in order.items] == ["A", "B"]

    def test_many_relation_is_replaced(self):
        order = Order()
        order.set_attributes({"items": [{"sku": "x"}]})
        order.set_attributes({"items": [{"sku": "y"}]})
        assert len(order.items) == 1
        assert order.items[0].sku == "y"

    def test_many_relation_from_its_own_container(self):
        order = Order(items=[{"sku": "A"}, {"sku": "B"}])
        order.items = order.items
        assert [item.sku for item in order.items] == ["A", "B"]

    def test_many_relation_accepts_models(self):
        order = Order(items=[OrderItem(sku="A", quantity=3)])
        assert order.items[0].quantity == 3

    def test_alias(self):
        order = Order()
        order.nr = "1002"
        assert order.number == "1002"
        assert order.nr == "1002"

    def test_alias_of_relation(self):
        order = Order(lines=[{"sku": "A"}])
        assert order.items[0].sku == "A"
        assert order.lines is order.items

    def test_unknown_name_is_not_handled(self):
        order = Order()
        assert order.set_attribute("colour", "red") is False

    def test_unknown_name_is_dropped(self):
        order = Order()
        order.colour = "red"
        with pytest.raises(UnknownPropertyError):
            order.colour
        assert "colour" not in order.get_body()


class TestBulkPopulation:
    def test_mapping(self):
        order = Order().set_attributes({"id": 7, "number": "1001", "unknown": True})
        assert order.id == 7
        assert order.number == "1001"

    def test_envelope(self):
        order = Order().set_attributes(PlainResponseEnvelope({"number": "1001"}))
        assert order.number == "1001"

    def test_model(self):
        source = Order(number="1001", items=[{"sku": "A"}])
        order = Order().set_attributes(source)
        assert order.number == "1001"
        assert order.items[0].sku == "A"
        assert order.items[0] is not source.items[0]

    def test_from_body(self):
        order = Order.from_body({"number": "1001"})
        assert isinstance(order, Order)
        assert order.number == "1001"

    @pytest.mark.parametrize("attributes", [None, "number=1", 42, ["number"]])
    def test_invalid(self, attributes):
        with pytest.raises(InvalidAttributesError) as excinfo:
            Order().set_attributes(attributes)
        assert excinfo.value.message == "Invalid attributes for [Order]"
        assert excinfo.value.actual == attributes

    def test_invalid_envelope(self):
        with pytest.raises(InvalidAttributesError):
            Order().set_attributes(PlainResponseEnvelope(["not", "a", "mapping"]))

    def test_invalid_nested(self):
        with pytest.raises(InvalidAttributesError) as excinfo:
            Order(customer="someone")
        assert "[Customer]" in str(excinfo.value)


class TestValidation:
    def test_required_missing(self):
        with pytest.raises(RequiredAttributeMissingError) as excinfo:
            OrderItem().validate()
        assert excinfo.value.attribute == "sku"
        assert excinfo.value.model_name == "OrderItem"
        assert str(excinfo.value) == "[sku] is required for [OrderItem]"

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_required_blank(self, value):
        with pytest.raises(RequiredAttributeMissingError):
            OrderItem(sku=value).validate()

    def test_required_set(self):
        item = OrderItem()
        assert not item.is_valid()
        item.sku = "A-1"
        item.validate()
        assert item.is_valid()

    def test_required_non_string(self):
        OrderItem(sku=0).validate()

    def test_required_empty_many_relation(self):
        with pytest.raises(RequiredAttributeMissingError) as excinfo:
            Order(number="1001").validate()
        assert excinfo.value.attribute == "items"
        assert excinfo.value.model_name == "Order"

    def test_nested_many_relation(self):
        order = Order(number="1001", items=[{"sku": "A"}, {"quantity": 1}])
        with pytest.raises(RequiredAttributeMissingError) as excinfo:
            order.validate()
        assert excinfo.value.model_name == "OrderItem"
        assert excinfo.value.model is order.items[1]

    def test_nested_one_relation(self):
        customer = Customer(id=1, email="a@example.com", address={"street": "Main st 1"})
        with pytest.raises(RequiredAttributeMissingError) as excinfo:
            customer.validate()
        assert str(excinfo.value) == "[city] is required for [Address]"

    def test_required_one_relation_missing(self):
        with pytest.raises(RequiredAttributeMissingError) as excinfo:
            Customer(id=1, email="a@example.com").validate()
        assert excinfo.value.attribute == "address"

    def test_valid_tree(self):
        order = Order(
            number="1001",
            items=[{"sku": "A"}],
            customer={"id": 1, "email": "a@example.com"},
        )
        # the customer relation is not required on the order
        order.validate()

    def test_attribute_rules(self):
        customer = Customer()
        assert customer.get_attribute_rules("id") == ["required", "integer"]
        assert customer.get_attribute_rules("email") == ["required"]
        assert customer.get_attribute_rules("mail") == []
        assert OrderItem().get_attribute_rules("price") == ["numeric"]

    def test_attribute_rules_are_memoized(self):
        customer = Customer()
        rules = customer.get_attribute_rules("id")
        assert customer.get_attribute_rules("id") is rules
        assert Customer().get_attribute_rules("id") is not rules


class TestSerialization:
    @pytest.fixture
    def order(self) -> Order:
        return Order(
            id=1,
            number="1001",
            tags=("a", "b"),
            customer={"id": 5, "email": "a@example.com", "address": {"city": "Utrecht"}},
            items=[{"sku": "A", "quantity": 1}, {"sku": "B", "quantity": 2}],
        )

    def test_body(self, order):
        assert order.get_body() == {
            "id": 1,
            "number": "1001",
            "note": None,
            "customer": {
                "id": 5,
                "email": "a@example.com",
                "address": {"street": None, "city": "Utrecht", "zipcode": None},
            },
            "items": [
                {"sku": "A", "quantity": 1, "price": None},
                {"sku": "B", "quantity": 2, "price": None},
            ],
            "tags": ["a", "b"],
            "invoice": None,
        }

    def test_empty_many_relation_is_left_out(self):
        assert "items" not in Order().get_body()

    def test_to_array(self, order):
        assert order.to_array() == order.get_body()

    def test_to_json(self, order):
        assert json.loads(order.to_json()) == order.get_body()

    def test_round_trip(self, order):
        copy = Order().set_attributes(order.get_body())
        for name in ("id", "number", "note", "tags", "invoice"):
            assert copy.get(name) == order.to_array()[name]
        assert copy.get_body() == order.get_body()


class CountingFallbackOrder(Order):
    _reads: typing.List[str]
    _writes: typing.List[typing.Tuple[str, typing.Any]]

    def get_property(self, name):
        self._reads.append(name)
        return "fallback"

    def set_property(self, name, value):
        self._writes.append((name, value))

    def __init__(self, **attributes):
        self._reads = []
        self._writes = []
        super().__init__(**attributes)


class TestFallback:
    def test_read_reaches_fallback_once(self):
        order = CountingFallbackOrder()
        assert order.get("colour") == "fallback"
        assert order._reads == ["colour"]

    def test_write_reaches_fallback_once(self):
        order = CountingFallbackOrder()
        order.set("colour", "red")
        assert order._writes == [("colour", "red")]

    def test_declared_names_bypass_fallback(self):
        order = CountingFallbackOrder(number="1", nr="2", items=[])
        order.get("number")
        order.get("nr")
        order.get("customer")
        assert order._reads == []
        assert order._writes == []

    def test_getter_and_setter_methods(self):
        class Product(Model):
            class Meta:
                attributes = ["price_cents"]

            def get_price(self):
                return self.price_cents / 100

            def set_price(self, value):
                self.price_cents = int(round(value * 100))

        product = Product()
        product.price = 12.5
        assert product.price_cents == 1250
        assert product.price == 12.5

    def test_unknown_read_is_attribute_error(self):
        order = Order()
        assert not hasattr(order, "colour")
        assert getattr(order, "colour", "default") == "default"
        with pytest.raises(UnknownPropertyError) as excinfo:
            order.get("colour")
        assert excinfo.value.name == "colour"
        assert str(excinfo.value) == "Getting unknown property: Order::colour"

    def test_model_methods_are_not_properties(self):
        order = Order(number="1")
        with pytest.raises(UnknownPropertyError):
            order.body
        with pytest.raises(UnknownPropertyError):
            order.property
        with pytest.raises(UnknownPropertyError):
            order.get("attribute_rules")
        assert not hasattr(order, "name")

    def test_model_methods_are_not_setters(self):
        order = Order(number="1")
        order.attributes = {"number": "2"}
        order.property = "x"
        order.set("attribute", "x")
        assert order.number == "1"
        assert order.get_body()["number"] == "1"
