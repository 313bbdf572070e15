"""In-memory model of a service API resource used by the code generators."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field

from .config import GeneratorConfig, ResourceConfig, default_config


class GenerationError(Exception):
    """Raised when the model cannot be turned into generated code."""


class OpType(enum.Enum):
    """The role an API operation plays for a resource."""

    CREATE = "create"
    DELETE = "delete"
    GET = "get"
    LIST = "list"
    UPDATE = "update"
    GET_ATTRIBUTES = "get_attributes"
    SET_ATTRIBUTES = "set_attributes"


@dataclass(eq=False)
class Shape:
    """A data type from a service API model."""

    name: str
    type: str
    members: dict[str, Shape] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    key: Shape | None = None
    value: Shape | None = None
    member: Shape | None = None

    def member_names(self) -> list[str]:
        """Return the structure's member names in sorted order."""
        return sorted(self.members)


@dataclass
class Operation:
    """An API operation and its input shape."""

    name: str
    input: Shape | None = None


@dataclass
class Field:
    """A field of a resource's Spec or Status."""

    name: str
    shape: Shape

    @property
    def camel(self) -> str:
        return camel_name(self.name)


_INITIALISMS = frozenset(
    {
        "ACL", "ACP", "API", "ARN", "ASCII", "CPU", "CSS", "DB", "DNS", "EOF",
        "GUID", "HTML", "HTTP", "HTTPS", "ID", "IP", "JSON", "KMS", "LHS",
        "QPS", "RAM", "RHS", "RPC", "SLA", "SMTP", "SNS", "SQL", "SQS", "SSH",
        "SSL", "TCP", "TLS", "TTL", "UDP", "UI", "UID", "URI", "URL", "UTF8",
        "UUID", "VM", "VPC", "XML", "XSRF", "XSS",
    }
)

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+[0-9]*|[A-Z]+[0-9]*|[0-9]+")


def _clean_word(word: str) -> str:
    upper = word.upper()
    if upper in _INITIALISMS:
        return upper
    if len(word) > 2 and word.endswith("s") and word[:-1].upper() in _INITIALISMS:
        return word[:-1].upper() + "s"
    return word[:1].upper() + word[1:]


def camel_name(name: str) -> str:
    """Return the exported CamelCase form of a name, with initialisms upper-cased."""
    return "".join(_clean_word(word) for word in _WORD_RE.findall(name))


@dataclass
class Resource:
    """A top-level resource exposed as a custom resource definition."""

    name: str
    config: GeneratorConfig = field(default_factory=default_config)
    ops: dict[OpType, Operation] = field(default_factory=dict)
    spec_fields: dict[str, Field] = field(default_factory=dict)
    status_fields: dict[str, Field] = field(default_factory=dict)

    @property
    def resource_config(self) -> ResourceConfig | None:
        return self.config.resource_config(self.name)

    @property
    def unpacks_attributes_map(self) -> bool:
        rc = self.resource_config
        return rc is not None and rc.unpack_attributes_map

    @property
    def set_attributes_single_attribute(self) -> bool:
        rc = self.resource_config
        return rc is not None and rc.set_attributes_single_attribute

    def operation(self, op_type: OpType) -> Operation | None:
        """Return the operation registered for the given role, if any."""
        return self.ops.get(op_type)

    def input_field_rename(self, op_name: str, member_name: str) -> tuple[str, bool]:
        """Return the configured new name of an input member and whether it was renamed."""
        rc = self.resource_config
        if rc is not None:
            renamed = rc.renames.get(op_name, {}).get(member_name)
            if renamed is not None:
                return renamed, True
        return member_name, False

    def is_primary_arn_field(self, name: str) -> bool:
        """Tell whether the named field holds the resource's primary ARN."""
        rc = self.resource_config
        if rc is not None:
            for field_name, field_config in rc.fields.items():
                if field_config.is_arn_primary_key:
                    return field_name == name
        lowered = name.lower()
        return lowered == "arn" or lowered == (self.name + "arn").lower()