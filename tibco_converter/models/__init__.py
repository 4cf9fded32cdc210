"""
Domain models produced by the parsers.
"""

from .process import (
    Activity,
    ActivityConfig,
    ActivityKind,
    CallProcessConfig,
    FaultHandler,
    FileConfig,
    GenericConfig,
    Group,
    HttpReceiverConfig,
    HttpSenderConfig,
    JavaCodeConfig,
    JdbcConfig,
    JmsConfig,
    Mapping,
    MappingKind,
    Position,
    Process,
    SleepConfig,
    Starter,
    Transition,
    TransitionKind,
    UNNAMED_PROCESS,
    Variable,
    build_activity_config,
)
from .schema import (
    Element,
    Import,
    Restriction,
    RestrictionKind,
    Schema,
    SchemaType,
    TypeKind,
    UNBOUNDED,
)

__all__ = [
    # Process model
    "Activity",
    "ActivityConfig",
    "ActivityKind",
    "CallProcessConfig",
    "FaultHandler",
    "FileConfig",
    "GenericConfig",
    "Group",
    "HttpReceiverConfig",
    "HttpSenderConfig",
    "JavaCodeConfig",
    "JdbcConfig",
    "JmsConfig",
    "Mapping",
    "MappingKind",
    "Position",
    "Process",
    "SleepConfig",
    "Starter",
    "Transition",
    "TransitionKind",
    "UNNAMED_PROCESS",
    "Variable",
    "build_activity_config",
    # Schema model
    "Element",
    "Import",
    "Restriction",
    "RestrictionKind",
    "Schema",
    "SchemaType",
    "TypeKind",
    "UNBOUNDED",
]
