"""
Process model for BusinessWorks process definitions.

Activities carry a typed configuration per activity kind; attributes the
typed configuration does not know about are kept verbatim in ``extra``.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

UNNAMED_PROCESS = "UnnamedProcess"


class ActivityKind(Enum):
    """Supported activity kinds."""

    # HTTP
    HTTP_RECEIVER = "HTTP_RECEIVER"
    HTTP_SENDER = "HTTP_SENDER"

    # Database
    JDBC_QUERY = "JDBC_QUERY"
    JDBC_UPDATE = "JDBC_UPDATE"
    JDBC_CALL = "JDBC_CALL"

    # JMS
    JMS_QUEUE_SENDER = "JMS_QUEUE_SENDER"
    JMS_QUEUE_RECEIVER = "JMS_QUEUE_RECEIVER"
    JMS_TOPIC_PUBLISHER = "JMS_TOPIC_PUBLISHER"
    JMS_TOPIC_SUBSCRIBER = "JMS_TOPIC_SUBSCRIBER"

    # File
    READ_FILE = "READ_FILE"
    WRITE_FILE = "WRITE_FILE"

    # General
    MAPPER = "MAPPER"
    JAVA_CODE = "JAVA_CODE"
    CALL_PROCESS = "CALL_PROCESS"

    # Control flow
    NULL = "NULL"
    SLEEP = "SLEEP"

    # Error handling
    CATCH = "CATCH"
    RETHROW = "RETHROW"


class TransitionKind(Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    ALWAYS = "ALWAYS"


class MappingKind(Enum):
    DIRECT = "DIRECT"
    EXPRESSION = "EXPRESSION"
    FUNCTION = "FUNCTION"


# Typed activity configuration


@dataclass
class ActivityConfig:
    """
    Base configuration shared by all activity kinds.

    Subclasses declare ``SOURCE_KEYS``: for each typed field, the raw keys it
    is read from, first present wins.
    """

    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "description": ("description",),
    }

    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def source_keys(cls) -> Dict[str, Tuple[str, ...]]:
        keys: Dict[str, Tuple[str, ...]] = {}
        for klass in reversed(cls.__mro__):
            keys.update(klass.__dict__.get("SOURCE_KEYS", {}))
        return keys

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "ActivityConfig":
        """Split a raw attribute mapping into typed fields and ``extra``."""
        remaining = dict(raw)
        values: Dict[str, Any] = {}

        for field_name, keys in cls.source_keys().items():
            for key in keys:
                if key in remaining:
                    value = remaining.pop(key)
                    if field_name not in values and value not in (None, ""):
                        values[field_name] = value

        return cls(extra=remaining, **values)

    def as_dict(self) -> Dict[str, Any]:
        """Flat mapping equivalent to the raw configuration."""
        result: Dict[str, Any] = {}
        keys = self.source_keys()
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[keys.get(f.name, (f.name,))[0]] = value
        result.update(self.extra)
        return result

    def get(self, key: str, default: Any = None) -> Any:
        return self.as_dict().get(key, default)


@dataclass
class HttpReceiverConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "method": ("method", "httpMethod"),
        "path": ("path", "resourcePath"),
    }

    method: Optional[str] = None
    path: Optional[str] = None


@dataclass
class HttpSenderConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "method": ("method", "httpMethod"),
        "url": ("url", "host", "RequestURI"),
    }

    method: Optional[str] = None
    url: Optional[str] = None


@dataclass
class JdbcConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "statement": ("statement", "sql"),
        "connection": ("jdbcSharedConfig", "connection"),
        "timeout": ("timeout",),
    }

    statement: Optional[str] = None
    connection: Optional[str] = None
    timeout: Optional[str] = None


@dataclass
class JmsConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "destination": ("destination", "queue", "topic"),
        "connection": ("ConnectionReference", "connection"),
    }

    destination: Optional[str] = None
    connection: Optional[str] = None


@dataclass
class FileConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "file_name": ("fileName", "filename"),
        "encoding": ("encoding",),
    }

    file_name: Optional[str] = None
    encoding: Optional[str] = None


@dataclass
class CallProcessConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "process_name": ("processName", "process"),
    }

    process_name: Optional[str] = None


@dataclass
class SleepConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "interval": ("IntervalInMillisec", "interval"),
    }

    interval: Optional[str] = None


@dataclass
class JavaCodeConfig(ActivityConfig):
    SOURCE_KEYS: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "code": ("javaCode", "code"),
        "class_name": ("fileName", "className"),
    }

    code: Optional[str] = None
    class_name: Optional[str] = None


@dataclass
class GenericConfig(ActivityConfig):
    """Configuration for kinds without dedicated fields."""

    pass


CONFIG_TYPES: Dict[ActivityKind, Type[ActivityConfig]] = {
    ActivityKind.HTTP_RECEIVER: HttpReceiverConfig,
    ActivityKind.HTTP_SENDER: HttpSenderConfig,
    ActivityKind.JDBC_QUERY: JdbcConfig,
    ActivityKind.JDBC_UPDATE: JdbcConfig,
    ActivityKind.JDBC_CALL: JdbcConfig,
    ActivityKind.JMS_QUEUE_SENDER: JmsConfig,
    ActivityKind.JMS_QUEUE_RECEIVER: JmsConfig,
    ActivityKind.JMS_TOPIC_PUBLISHER: JmsConfig,
    ActivityKind.JMS_TOPIC_SUBSCRIBER: JmsConfig,
    ActivityKind.READ_FILE: FileConfig,
    ActivityKind.WRITE_FILE: FileConfig,
    ActivityKind.CALL_PROCESS: CallProcessConfig,
    ActivityKind.SLEEP: SleepConfig,
    ActivityKind.JAVA_CODE: JavaCodeConfig,
}


def build_activity_config(kind: ActivityKind, raw: Dict[str, Any]) -> ActivityConfig:
    """Create the configuration variant for ``kind``; other kinds get GenericConfig."""
    config_type = CONFIG_TYPES.get(kind, GenericConfig)
    return config_type.from_raw(raw)


# Process graph


@dataclass
class Mapping:
    """A data binding from a source expression to a target path."""

    source: str
    target: str
    kind: MappingKind = MappingKind.DIRECT
    config: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Position:
    """Designer coordinates; advisory only."""

    x: int = 0
    y: int = 0


@dataclass
class Activity:
    id: str
    name: str
    kind: ActivityKind
    config: ActivityConfig = field(default_factory=GenericConfig)
    input_mappings: List[Mapping] = field(default_factory=list)
    output_mappings: List[Mapping] = field(default_factory=list)
    position: Position = field(default_factory=Position)


@dataclass
class Transition:
    id: str
    source: str
    target: str
    condition: Optional[str] = None
    kind: TransitionKind = TransitionKind.SUCCESS


@dataclass
class Variable:
    name: str
    type: str
    schema: Optional[str] = None
    default_value: Any = None
    scope: str = "PROCESS"  # PROCESS, GROUP, ACTIVITY


@dataclass
class Group:
    id: str
    name: str
    kind: str  # SCOPE, TRANSACTION, CRITICAL_SECTION, REPEAT
    activities: List[str] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Starter:
    kind: str  # HTTP, JMS, FILE, TIMER
    config: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FaultHandler:
    fault_type: Optional[str] = None
    activities: List[str] = field(default_factory=list)
    catch_all: bool = False


@dataclass
class Process:
    """A parsed process definition."""

    name: str = UNNAMED_PROCESS
    description: Optional[str] = None
    activities: List[Activity] = field(default_factory=list)
    transitions: List[Transition] = field(default_factory=list)
    variables: List[Variable] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    starter: Optional[Starter] = None
    fault_handlers: List[FaultHandler] = field(default_factory=list)
    global_variables: List[str] = field(default_factory=list)

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        """Get activity by id."""
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None

    def activities_of_kind(self, *kinds: ActivityKind) -> List[Activity]:
        return [a for a in self.activities if a.kind in kinds]

    def outgoing(self, activity_id: str) -> List[Transition]:
        """Transitions leaving an activity, in document order."""
        return [t for t in self.transitions if t.source == activity_id]
