"""
BusinessWorks process definition parser.

Turns ``.process`` / ``.bwp`` markup into a ``Process`` model. Individual
activities and transitions that cannot be read are reported as warnings and
skipped; only a missing or malformed document is an error.
"""

from typing import Any, Dict, List, Optional

from ..diagnostics import ParseResult, ValidationResult
from ..logging_config import get_logger
from ..models.process import (
    Activity,
    ActivityKind,
    FaultHandler,
    Group,
    Mapping,
    MappingKind,
    Position,
    Process,
    Starter,
    Transition,
    TransitionKind,
    UNNAMED_PROCESS,
    Variable,
    build_activity_config,
)
from . import xml_tree
from .base import BaseParser, ParserConfig, item_locator
from .xml_tree import TreeNode

logger = get_logger(__name__)

PROCESS_MARKER = "pd:ProcessDefinition"

ROOT_CANDIDATES = ["pd:ProcessDefinition", "ProcessDefinition", "process", "bw:process"]

# Activity type id -> kind. Unknown ids resolve to NULL.
ACTIVITY_KINDS: Dict[str, ActivityKind] = {
    # Converter-native ids
    "com.tibco.plugin.http.activities.HttpReceiveActivity": ActivityKind.HTTP_RECEIVER,
    "com.tibco.plugin.http.activities.HttpSendActivity": ActivityKind.HTTP_SENDER,
    "com.tibco.plugin.jdbc.activities.JDBCQueryActivity": ActivityKind.JDBC_QUERY,
    "com.tibco.plugin.jdbc.activities.JDBCUpdateActivity": ActivityKind.JDBC_UPDATE,
    "com.tibco.plugin.jms.activities.JMSQueueSendActivity": ActivityKind.JMS_QUEUE_SENDER,
    "com.tibco.plugin.jms.activities.JMSQueueReceiveActivity": ActivityKind.JMS_QUEUE_RECEIVER,
    "com.tibco.plugin.file.activities.FileReadActivity": ActivityKind.READ_FILE,
    "com.tibco.plugin.file.activities.FileWriteActivity": ActivityKind.WRITE_FILE,
    "com.tibco.pe.core.MapperActivity": ActivityKind.MAPPER,
    "com.tibco.pe.core.JavaCodeActivity": ActivityKind.JAVA_CODE,
    "com.tibco.pe.core.CallProcessActivity": ActivityKind.CALL_PROCESS,
    "com.tibco.pe.core.NullActivity": ActivityKind.NULL,
    "com.tibco.pe.core.SleepActivity": ActivityKind.SLEEP,
    "com.tibco.pe.core.CatchActivity": ActivityKind.CATCH,
    "com.tibco.pe.core.RethrowActivity": ActivityKind.RETHROW,
    # BusinessWorks 5 plugin ids
    "com.tibco.plugin.http.HTTPEventSource": ActivityKind.HTTP_RECEIVER,
    "com.tibco.plugin.http.client.HttpRequestActivity": ActivityKind.HTTP_SENDER,
    "com.tibco.plugin.jdbc.JDBCQueryActivity": ActivityKind.JDBC_QUERY,
    "com.tibco.plugin.jdbc.JDBCUpdateActivity": ActivityKind.JDBC_UPDATE,
    "com.tibco.plugin.jdbc.JDBCCallActivity": ActivityKind.JDBC_CALL,
    "com.tibco.plugin.jms.JMSQueueSendActivity": ActivityKind.JMS_QUEUE_SENDER,
    "com.tibco.plugin.jms.JMSQueueEventSource": ActivityKind.JMS_QUEUE_RECEIVER,
    "com.tibco.plugin.jms.JMSTopicPublishActivity": ActivityKind.JMS_TOPIC_PUBLISHER,
    "com.tibco.plugin.jms.JMSTopicEventSource": ActivityKind.JMS_TOPIC_SUBSCRIBER,
    "com.tibco.plugin.file.FileReadActivity": ActivityKind.READ_FILE,
    "com.tibco.plugin.file.FileWriteActivity": ActivityKind.WRITE_FILE,
    "com.tibco.plugin.mapper.MapperActivity": ActivityKind.MAPPER,
    "com.tibco.plugin.java.JavaActivity": ActivityKind.JAVA_CODE,
    "com.tibco.plugin.timer.NullActivity": ActivityKind.NULL,
    "com.tibco.plugin.timer.SleepActivity": ActivityKind.SLEEP,
}

TRANSITION_KINDS: Dict[str, TransitionKind] = {
    "error": TransitionKind.ERROR,
    "always": TransitionKind.ALWAYS,
    "success": TransitionKind.SUCCESS,
}

# Children that are structure, not configuration
_NON_CONFIG_CHILDREN = frozenset(["inputBindings", "outputBindings", "config", "configuration"])


def resolve_activity_kind(type_id: Optional[str]) -> ActivityKind:
    """Map a fully qualified activity type id to its kind."""
    if not type_id:
        return ActivityKind.NULL
    return ACTIVITY_KINDS.get(type_id.strip(), ActivityKind.NULL)


def resolve_transition_kind(value: Optional[str]) -> TransitionKind:
    if not value:
        return TransitionKind.SUCCESS
    return TRANSITION_KINDS.get(value.strip().lower(), TransitionKind.SUCCESS)


class ProcessParser(BaseParser[Process]):
    """
    Parser for BusinessWorks process definitions.

    Example:
        >>> parser = ProcessParser()
        >>> result = parser.parse(text)
        >>> if result.success:
        ...     print(result.data.name, len(result.data.activities))
    """

    source_name = "process"

    def parse(self, text: str) -> ParseResult[Process]:
        """
        Parse process definition markup.

        Args:
            text: Raw process XML

        Returns:
            ParseResult holding the Process, or None when the document is
            malformed or is not a process definition
        """
        self.clear_diagnostics()

        self._check_document(text)
        if self.errors:
            return self.create_result(None)

        try:
            tree = self.load_tree(text)
            if tree is None:
                return self.create_result(None)

            definition = self.find_root(tree, ROOT_CANDIDATES, "ProcessDefinition")
            if definition is None:
                self.add_error(
                    "No process definition found", self.source_name, "NO_PROCESS_DEF"
                )
                return self.create_result(None)

            process = self._build_process(definition)
            logger.info(
                "Parsed process '%s': %d activities, %d transitions",
                process.name,
                len(process.activities),
                len(process.transitions),
            )
            return self.create_result(process)

        except Exception as e:
            self.handle_error(e, self.source_name, "PARSE_ERROR")
            if not self.config.continue_on_error:
                raise
            return self.create_result(None)

    def validate(self, text: str) -> ValidationResult:
        """Check that text looks like a process definition without building it."""
        self.clear_diagnostics()
        self._check_document(text)
        return self.create_validation_result()

    def _check_document(self, text: str) -> None:
        self.check_structure(text)

        if PROCESS_MARKER not in text:
            self.add_error(
                f"Missing {PROCESS_MARKER} root element", self.source_name, "INVALID_BWP"
            )

        declared = xml_tree.namespaces(text)
        if "pd" not in declared and "default" not in declared:
            self.add_warning(
                "No process definition namespace declared",
                self.source_name,
                "MISSING_NAMESPACE",
            )

    def _build_process(self, definition: TreeNode) -> Process:
        description = xml_tree.attr_or_child(definition, "description") or xml_tree.child_text(
            definition, "documentation"
        )

        return Process(
            name=xml_tree.attr_or_child(definition, "name") or UNNAMED_PROCESS,
            description=description or None,
            activities=self._extract_activities(definition),
            transitions=self._extract_transitions(definition),
            variables=self._extract_variables(definition),
            groups=self._extract_groups(definition),
            starter=self._extract_starter(definition),
            fault_handlers=self._extract_fault_handlers(definition),
            global_variables=self._extract_global_variables(definition),
        )

    # Activities

    def _extract_activities(self, definition: TreeNode) -> List[Activity]:
        activities = []
        for node in xml_tree.iter_nodes(definition, "activity"):
            try:
                activity = self._parse_activity(node)
            except Exception as e:
                locator = item_locator("activity", xml_tree.attr_or_child(node, "name"))
                self.recover(e, locator, "ACTIVITY_PARSE_ERROR")
                continue
            if activity is not None:
                activities.append(activity)
        return activities

    def _parse_activity(self, node: TreeNode) -> Optional[Activity]:
        name = xml_tree.attr_or_child(node, "name")
        if not name:
            self.add_warning("Activity missing name/id", "activity", "MISSING_ACTIVITY_ID")
            return None

        kind = resolve_activity_kind(xml_tree.attr_or_child(node, "type"))

        return Activity(
            id=name,
            name=name,
            kind=kind,
            config=build_activity_config(kind, self._raw_config(node)),
            input_mappings=self._extract_mappings(node, "inputBindings"),
            output_mappings=self._extract_mappings(node, "outputBindings"),
            position=self._position(node),
        )

    def _position(self, node: TreeNode) -> Position:
        # Non-numeric coordinates raise and fail the activity
        x = xml_tree.attr_or_child(node, "x") or "0"
        y = xml_tree.attr_or_child(node, "y") or "0"
        return Position(x=int(x), y=int(y))

    def _raw_config(self, node: TreeNode) -> Dict[str, Any]:
        """Attributes plus leaf children of the activity's configuration element."""
        source = xml_tree.find_child(node, "config", "configuration") or node

        raw: Dict[str, Any] = dict(source.attributes)
        for child in source.children:
            if child.tag in _NON_CONFIG_CHILDREN or not child.is_leaf:
                continue
            raw.setdefault(child.tag, child.text or "")
        return raw

    def _extract_mappings(self, node: TreeNode, container: str) -> List[Mapping]:
        bindings = xml_tree.find_child(node, container)
        if bindings is None:
            return []

        return [
            Mapping(
                source=xml_tree.attr_or_child(mapping, "source") or "",
                target=xml_tree.attr_or_child(mapping, "target") or "",
                kind=MappingKind.DIRECT,
                config=mapping.to_dict(),
            )
            for mapping in xml_tree.iter_nodes(bindings, "mapping")
        ]

    # Transitions

    def _extract_transitions(self, definition: TreeNode) -> List[Transition]:
        transitions = []
        for node in xml_tree.iter_nodes(definition, "transition"):
            try:
                transition = self._parse_transition(node)
            except Exception as e:
                self.recover(e, self._transition_locator(node), "TRANSITION_PARSE_ERROR")
                continue
            if transition is not None:
                transitions.append(transition)
        return transitions

    def _parse_transition(self, node: TreeNode) -> Optional[Transition]:
        source = xml_tree.attr_or_child(node, "from")
        target = xml_tree.attr_or_child(node, "to")

        if not source or not target:
            self.add_warning(
                "Transition missing from/to attributes",
                self._transition_locator(node),
                "INVALID_TRANSITION",
            )
            return None

        kind_value = xml_tree.attr_or_child(node, "type") or xml_tree.attr_or_child(
            node, "conditionType"
        )
        condition = xml_tree.attr_or_child(node, "condition") or xml_tree.attr_or_child(
            node, "xpath"
        )

        return Transition(
            id=f"{source}->{target}",
            source=source,
            target=target,
            condition=condition,
            kind=resolve_transition_kind(kind_value),
        )

    def _transition_locator(self, node: TreeNode) -> str:
        source = xml_tree.attr_or_child(node, "from") or "?"
        target = xml_tree.attr_or_child(node, "to") or "?"
        if source == target == "?":
            return "transition"
        return item_locator("transition", f"{source}->{target}")

    # Not extracted yet; subclasses may override these.

    def _extract_variables(self, definition: TreeNode) -> List[Variable]:
        return []

    def _extract_groups(self, definition: TreeNode) -> List[Group]:
        return []

    def _extract_starter(self, definition: TreeNode) -> Optional[Starter]:
        return None

    def _extract_fault_handlers(self, definition: TreeNode) -> List[FaultHandler]:
        return []

    def _extract_global_variables(self, definition: TreeNode) -> List[str]:
        return []


def extract_process(text: str, config: Optional[ParserConfig] = None) -> ParseResult[Process]:
    """Parse process markup with a fresh parser."""
    return ProcessParser(config).parse(text)
