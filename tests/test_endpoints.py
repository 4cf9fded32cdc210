"""Tests for REST endpoint synthesis."""

from tibco_converter.codegen.spring.endpoints import (
    DEFAULT_REQUEST_TYPE,
    DEFAULT_RESPONSE_TYPE,
    default_path,
    has_query_params,
    infer_request_type,
    infer_response_type,
    path_variables,
    synthesize_endpoints,
)
from tibco_converter.models import (
    Activity,
    ActivityKind,
    HttpReceiverConfig,
    Mapping,
    Process,
    Transition,
    build_activity_config,
)


def receiver(name, method=None, path=None, **kwargs):
    return Activity(
        id=name,
        name=name,
        kind=ActivityKind.HTTP_RECEIVER,
        config=HttpReceiverConfig(method=method, path=path),
        **kwargs,
    )


class TestEndpointSynthesis:
    """Tests for per-receiver endpoint derivation."""

    def test_defaults(self):
        process = Process(name="Processes/OrderService.process", activities=[receiver("Receive")])
        endpoint = synthesize_endpoints(process)[0]
        assert endpoint.method == "POST"
        assert endpoint.path == "/orderService"
        assert endpoint.has_request_body
        assert not endpoint.has_path_variables
        assert endpoint.request_type == DEFAULT_REQUEST_TYPE
        assert endpoint.response_type == DEFAULT_RESPONSE_TYPE
        assert endpoint.description == "Handle POST request for /orderService"

    def test_configured_method_and_path(self):
        process = Process(
            name="Items", activities=[receiver("GetItem", method="get", path="/items/{id}")]
        )
        endpoint = synthesize_endpoints(process)[0]
        assert endpoint.method == "GET"
        assert endpoint.path == "/items/{id}"
        assert endpoint.has_path_variables
        assert endpoint.path_variables == ["id"]
        assert not endpoint.has_request_body
        assert endpoint.method_name == "getItem"

    def test_alternate_config_keys(self):
        config = build_activity_config(
            ActivityKind.HTTP_RECEIVER, {"httpMethod": "put", "resourcePath": "/things"}
        )
        activity = Activity(id="A", name="A", kind=ActivityKind.HTTP_RECEIVER, config=config)
        endpoint = synthesize_endpoints(Process(name="P", activities=[activity]))[0]
        assert (endpoint.method, endpoint.path) == ("PUT", "/things")
        assert endpoint.has_request_body

    def test_configured_description(self):
        activity = receiver("A")
        activity.config.description = "Creates an order"
        endpoint = synthesize_endpoints(Process(name="P", activities=[activity]))[0]
        assert endpoint.description == "Creates an order"

    def test_only_receivers_become_endpoints(self, order_process):
        endpoints = synthesize_endpoints(order_process)
        assert [e.activity_name for e in endpoints] == ["ReceiveOrder"]

    def test_method_names_are_unique(self):
        process = Process(name="P", activities=[receiver("Handle"), receiver("handle")])
        assert [e.method_name for e in synthesize_endpoints(process)] == ["handle", "handle2"]

    def test_reserved_method_names(self):
        process = Process(name="P", activities=[receiver("new")])
        assert synthesize_endpoints(process)[0].method_name == "newAction"

    def test_parsed_process(self, customer_process):
        endpoint = synthesize_endpoints(customer_process)[0]
        assert endpoint.method == "GET"
        assert endpoint.path_variables == ["customerId"]
        assert endpoint.has_query_params
        assert endpoint.response_type == "CustomerResponseDTO"
        assert endpoint.request_type == DEFAULT_REQUEST_TYPE


class TestTypeInference:
    """Tests for the mapping-based payload type heuristics."""

    def test_request_type_from_last_segment(self):
        activity = receiver(
            "A", input_mappings=[Mapping(source="$body", target="root/CreateOrderRequest")]
        )
        assert infer_request_type(activity) == "CreateOrderRequestDTO"

    def test_request_type_uses_first_match(self):
        activity = receiver(
            "A",
            input_mappings=[
                Mapping(source="$x", target="other"),
                Mapping(source="$y", target="FirstRequest"),
                Mapping(source="$z", target="SecondRequest"),
            ],
        )
        assert infer_request_type(activity) == "FirstRequestDTO"

    def test_request_type_default(self):
        activity = receiver("A", input_mappings=[Mapping(source="$x", target="order")])
        assert infer_request_type(activity) == DEFAULT_REQUEST_TYPE

    def test_response_type_from_output_mapping(self):
        activity = receiver(
            "A", output_mappings=[Mapping(source="Payload.OrderResponse", target="body")]
        )
        assert infer_response_type(activity, Process(activities=[activity])) == "OrderResponseDTO"

    def test_response_type_from_next_sender(self, order_process):
        activity = order_process.get_activity("ReceiveOrder")
        assert infer_response_type(activity, order_process) == "FulfilmentRequestDTO"

    def test_response_lookahead_is_one_hop(self):
        first = receiver("A")
        middle = Activity(id="B", name="B", kind=ActivityKind.MAPPER)
        sender = Activity(
            id="C",
            name="C",
            kind=ActivityKind.HTTP_SENDER,
            input_mappings=[Mapping(source="$x", target="RemoteRequest")],
        )
        process = Process(
            activities=[first, middle, sender],
            transitions=[
                Transition(id="A->B", source="A", target="B"),
                Transition(id="B->C", source="B", target="C"),
            ],
        )
        assert infer_response_type(first, process) == DEFAULT_RESPONSE_TYPE

    def test_query_params(self):
        with_query = receiver("A", input_mappings=[Mapping(source="$_queryParam/q", target="q")])
        without = receiver("B", input_mappings=[Mapping(source="$body", target="q")])
        assert has_query_params(with_query)
        assert not has_query_params(without)

    def test_path_helpers(self):
        assert path_variables("/a/{x}/b/{y}") == ["x", "y"]
        assert path_variables("/a") == []
        assert default_path("Processes/Billing.bwp") == "/billing"
