"""
REST endpoint synthesis from HTTP receiver activities.

The type inference here is heuristic: payload types are guessed from
mapping paths containing ``Request`` / ``Response`` and from the activity
directly after the receiver. Keep it in this module so it can be replaced
by schema-driven resolution without touching the controller generator.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from ...models.process import Activity, ActivityKind, Process
from ..core.naming import base_name, camel_case, create_java_sanitizer, sanitize_class_name

DEFAULT_METHOD = "POST"
DEFAULT_REQUEST_TYPE = "RequestDTO"
DEFAULT_RESPONSE_TYPE = "ResponseDTO"
DTO_SUFFIX = "DTO"

BODY_METHODS = frozenset(["POST", "PUT"])
QUERY_PARAM_MARKERS = ("queryParam", "$_queryParam")

_PATH_VARIABLE_RE = re.compile(r"\{([^}/]+)\}")


@dataclass
class Endpoint:
    """A REST endpoint derived from one HTTP receiver activity."""

    activity_name: str
    method: str
    path: str
    method_name: str
    request_type: str
    response_type: str
    description: str
    has_request_body: bool = False
    has_path_variables: bool = False
    path_variables: List[str] = field(default_factory=list)
    has_query_params: bool = False


def default_path(process_name: str) -> str:
    """Route for a receiver without a configured path."""
    return "/" + camel_case(base_name(process_name))


def _type_from_path(value: str) -> Optional[str]:
    segments = [s for s in re.split(r"[./]", value) if s]
    if not segments:
        return None
    return sanitize_class_name(segments[-1]) + DTO_SUFFIX


def infer_request_type(activity: Activity) -> str:
    """Type from the first input mapping targeting a ``Request`` path."""
    for mapping in activity.input_mappings:
        if "Request" in mapping.target:
            inferred = _type_from_path(mapping.target)
            if inferred:
                return inferred
    return DEFAULT_REQUEST_TYPE


def infer_response_type(activity: Activity, process: Process) -> str:
    """
    Type from the first output mapping sourced from a ``Response`` path.

    Falls back to the request type of an HTTP sender reached by one
    transition from the activity; no further traversal is done.
    """
    for mapping in activity.output_mappings:
        if "Response" in mapping.source:
            inferred = _type_from_path(mapping.source)
            if inferred:
                return inferred

    for transition in process.outgoing(activity.id):
        target = process.get_activity(transition.target)
        if target is not None and target.kind == ActivityKind.HTTP_SENDER:
            return infer_request_type(target)

    return DEFAULT_RESPONSE_TYPE


def has_query_params(activity: Activity) -> bool:
    return any(
        marker in mapping.source
        for mapping in activity.input_mappings
        for marker in QUERY_PARAM_MARKERS
    )


def path_variables(path: str) -> List[str]:
    """Names of ``{placeholders}`` in a route, in order."""
    return _PATH_VARIABLE_RE.findall(path)


def synthesize_endpoints(process: Process) -> List[Endpoint]:
    """
    Build one endpoint per HTTP receiver, in activity order.

    Args:
        process: Parsed process

    Returns:
        Endpoints with method names unique within the process
    """
    sanitizer = create_java_sanitizer()
    endpoints = []

    for activity in process.activities_of_kind(ActivityKind.HTTP_RECEIVER):
        config = activity.config
        method = str(getattr(config, "method", None) or DEFAULT_METHOD).upper()
        path = getattr(config, "path", None) or default_path(process.name)

        endpoints.append(
            Endpoint(
                activity_name=activity.name,
                method=method,
                path=path,
                method_name=sanitizer.sanitize_name(activity.name or process.name),
                request_type=infer_request_type(activity),
                response_type=infer_response_type(activity, process),
                description=config.description or f"Handle {method} request for {path}",
                has_request_body=method in BODY_METHODS,
                has_path_variables="{" in path,
                path_variables=path_variables(path),
                has_query_params=has_query_params(activity),
            )
        )

    return endpoints
