"""Record types stored in the resource index."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CodeExample:
    language: str
    code: str


@dataclass
class Prop:
    """A component property declared in the source."""

    name: str
    type: str = "unknown"
    default: Optional[str] = None
    description: str = ""
    documented: bool = False


@dataclass
class Event:
    """An event the component emits."""

    name: str
    source: str = "emit"
    type: str = "unknown"
    description: str = ""
    documented: bool = False


@dataclass
class Function:
    name: str
    kind: str
    exported: bool


@dataclass
class Constant:
    name: str
    value: Optional[str]
    exported: bool


@dataclass
class MarkdownSection:
    title: str
    content: str
    level: int = 1


@dataclass
class PropDoc:
    """A row from a component's "Props" documentation table."""

    name: str
    type: str
    default: str
    description: str


@dataclass
class EventDoc:
    """A row from a component's "Events" documentation table."""

    name: str
    type: str
    description: str


@dataclass
class ComponentRecord:
    name: str
    category: str
    file_path: str
    props: List[Prop] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    mixins: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    template: str = ""
    documentation: str = ""
    examples: List[CodeExample] = field(default_factory=list)
    props_doc: List[PropDoc] = field(default_factory=list)
    events_doc: List[EventDoc] = field(default_factory=list)


@dataclass
class UtilityRecord:
    name: str
    file_path: str
    functions: List[Function] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    documentation: str = ""


@dataclass
class ConfigRecord:
    name: str
    file_path: str
    exports: List[str] = field(default_factory=list)
    constants: List[Constant] = field(default_factory=list)
    documentation: str = ""


@dataclass
class PluginFile:
    """A source file belonging to a plugin directory."""

    name: str
    path: str
    exports: List[str] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)


@dataclass
class PluginRecord:
    name: str
    dir_path: str
    files: List[PluginFile] = field(default_factory=list)
    documentation: str = ""
    examples: List[CodeExample] = field(default_factory=list)


@dataclass
class TreeNode:
    name: str
    type: str
    path: str
    children: Optional[List["TreeNode"]] = None


@dataclass
class ExampleRecord:
    name: str
    dir_path: str
    package_info: Optional[Dict[str, Any]] = None
    structure: List[TreeNode] = field(default_factory=list)
    documentation: str = ""


@dataclass
class KindDocumentation:
    """Documentation describing a whole resource kind (e.g. utils/README.md)."""

    name: str
    documentation: str
    examples: List[CodeExample] = field(default_factory=list)


def to_dict(record: Any) -> Any:
    """Convert a record (or list of records) into JSON-ready data."""
    if isinstance(record, list):
        return [to_dict(item) for item in record]
    return asdict(record)
