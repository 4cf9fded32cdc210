"""Tests for naming helpers."""

from tibco_converter.codegen.core.naming import (
    NameSanitizer,
    NamingCase,
    base_name,
    camel_case,
    create_java_sanitizer,
    getter,
    kebab_case,
    pascal_case,
    pluralize,
    sanitize_class_name,
    sanitize_package_name,
    setter,
    snake_case,
)


class TestCaseConversion:
    """Tests for case converters."""

    def test_camel_case(self):
        assert camel_case("order_item") == "orderItem"
        assert camel_case("OrderItem") == "orderItem"
        assert camel_case("Get Customer") == "getCustomer"

    def test_pascal_case(self):
        assert pascal_case("order-item") == "OrderItem"
        assert pascal_case("orderItem") == "OrderItem"

    def test_snake_case(self):
        assert snake_case("OrderItem") == "order_item"
        assert snake_case("HTTPServer") == "http_server"

    def test_kebab_case(self):
        assert kebab_case("orderItem") == "order-item"


class TestPluralize:
    """Tests for naive English plurals."""

    def test_y_becomes_ies(self):
        assert pluralize("category") == "categories"

    def test_sibilants_get_es(self):
        assert pluralize("bus") == "buses"
        assert pluralize("dish") == "dishes"
        assert pluralize("match") == "matches"

    def test_default_appends_s(self):
        assert pluralize("order") == "orders"


class TestAccessors:
    """Tests for getter/setter names."""

    def test_getter(self):
        assert getter("orderId") == "getOrderId"
        assert getter("order_id") == "getOrderId"

    def test_setter(self):
        assert setter("name") == "setName"


class TestSanitizers:
    """Tests for Java identifier sanitizing."""

    def test_class_name(self):
        assert sanitize_class_name("OrderService") == "OrderService"
        assert sanitize_class_name("order-service") == "OrderService"
        assert sanitize_class_name("123abc") == "Generated123abc"

    def test_package_name(self):
        assert sanitize_package_name("Com.Example..Orders.") == "com.example.orders"

    def test_base_name(self):
        assert base_name("Processes/Orders/OrderService.process") == "OrderService"
        assert base_name("Processes\\Billing.bwp") == "Billing"
        assert base_name("Plain") == "Plain"


class TestNameSanitizer:
    """Tests for unique name generation."""

    def setup_method(self):
        self.sanitizer = create_java_sanitizer()

    def test_duplicates_get_counters(self):
        assert self.sanitizer.sanitize_name("order") == "order"
        assert self.sanitizer.sanitize_name("order") == "order2"
        assert self.sanitizer.sanitize_name("Order") == "order3"

    def test_reserved_words(self):
        assert self.sanitizer.sanitize_name("class") == "classAction"

    def test_suffix_on_conflict(self):
        self.sanitizer.sanitize_name("item")
        assert self.sanitizer.sanitize_name("item", suffix_on_conflict="_") == "item_2"

    def test_target_case(self):
        assert self.sanitizer.sanitize_name("order item", NamingCase.PASCAL_CASE) == "OrderItem"

    def test_leading_digit(self):
        assert self.sanitizer.sanitize_name("2fast") == "generated2fast"

    def test_add_used_name(self):
        self.sanitizer.add_used_name("request")
        assert self.sanitizer.sanitize_name("request") == "request2"

    def test_reset(self):
        sanitizer = NameSanitizer()
        sanitizer.sanitize_name("a")
        sanitizer.reset_used_names()
        assert sanitizer.sanitize_name("a") == "a"
