"""Generator configuration: per-resource overrides that steer code generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class PrefixConfig:
    """Accessor prefixes for the Spec and Status parts of a custom resource."""

    spec_field: str = ".Spec"
    status_field: str = ".Status"


@dataclass
class CompareFieldConfig:
    """How a field takes part in resource comparison."""

    is_ignored: bool = False


@dataclass
class FieldConfig:
    """Per-field instructions for the generator."""

    compare: CompareFieldConfig | None = None
    is_arn_primary_key: bool = False


@dataclass
class ExceptionConfig:
    """Error handling for one HTTP status code returned by a service API."""

    code: str | None = None
    message_prefix: str | None = None
    message_suffix: str | None = None


@dataclass
class HookConfig:
    """Custom code injected at a hook point, inline or from a template file."""

    code: str | None = None
    template_path: str | None = None


@dataclass
class ResourceConfig:
    """Generator instructions for a single top-level resource."""

    fields: dict[str, FieldConfig] = field(default_factory=dict)
    hooks: dict[str, HookConfig] = field(default_factory=dict)
    exceptions: dict[int, ExceptionConfig] = field(default_factory=dict)
    renames: dict[str, dict[str, str]] = field(default_factory=dict)
    unpack_attributes_map: bool = False
    set_attributes_single_attribute: bool = False


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _optional_str(value: Any, where: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{where} must be a string")
    return value


def _parse_field(name: str, data: Any) -> FieldConfig:
    data = _mapping(data, f"field {name}")
    compare = None
    if "compare" in data:
        compare_data = _mapping(data["compare"], f"field {name} compare")
        compare = CompareFieldConfig(is_ignored=bool(compare_data.get("is_ignored", False)))
    return FieldConfig(
        compare=compare,
        is_arn_primary_key=bool(data.get("is_arn_primary_key", False)),
    )


def _parse_hook(hook_id: str, data: Any) -> HookConfig:
    data = _mapping(data, f"hook {hook_id}")
    return HookConfig(
        code=_optional_str(data.get("code"), f"hook {hook_id} code"),
        template_path=_optional_str(data.get("template_path"), f"hook {hook_id} template_path"),
    )


def _parse_exceptions(name: str, data: Any) -> dict[int, ExceptionConfig]:
    errors = _mapping(_mapping(data, f"resource {name} exceptions").get("errors"), "errors")
    parsed: dict[int, ExceptionConfig] = {}
    for status, spec in errors.items():
        try:
            status_code = int(status)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"resource {name}: invalid HTTP status code {status!r}") from exc
        spec = _mapping(spec, f"resource {name} error {status}")
        parsed[status_code] = ExceptionConfig(
            code=_optional_str(spec.get("code"), "code"),
            message_prefix=_optional_str(spec.get("message_prefix"), "message_prefix"),
            message_suffix=_optional_str(spec.get("message_suffix"), "message_suffix"),
        )
    return parsed


def _parse_renames(name: str, data: Any) -> dict[str, dict[str, str]]:
    operations = _mapping(_mapping(data, f"resource {name} renames").get("operations"), "operations")
    renames: dict[str, dict[str, str]] = {}
    for op_name, op_data in operations.items():
        inputs = _mapping(_mapping(op_data, f"operation {op_name}").get("input_fields"), "input_fields")
        renames[op_name] = {str(k): str(v) for k, v in inputs.items()}
    return renames


def _parse_resource(name: str, data: Any) -> ResourceConfig:
    data = _mapping(data, f"resource {name}")
    unpack = data.get("unpack_attributes_map")
    single_attribute = False
    if isinstance(unpack, Mapping):
        single_attribute = bool(unpack.get("set_attributes_single_attribute", False))
        unpack_enabled = True
    else:
        unpack_enabled = bool(unpack)
    return ResourceConfig(
        fields={k: _parse_field(k, v) for k, v in _mapping(data.get("fields"), "fields").items()},
        hooks={k: _parse_hook(k, v) for k, v in _mapping(data.get("hooks"), "hooks").items()},
        exceptions=_parse_exceptions(name, data.get("exceptions")),
        renames=_parse_renames(name, data.get("renames")),
        unpack_attributes_map=unpack_enabled,
        set_attributes_single_attribute=single_attribute,
    )


@dataclass
class GeneratorConfig:
    """Top-level instructions for generating a service controller."""

    prefix_config: PrefixConfig = field(default_factory=PrefixConfig)
    include_ack_metadata: bool = False
    set_many_output_not_found_err_return: str = ""
    resources: dict[str, ResourceConfig] = field(default_factory=dict)

    def resource_config(self, name: str) -> ResourceConfig | None:
        """Return the configuration of the named resource, if any."""
        return self.resources.get(name)

    def resource_fields(self, name: str) -> dict[str, FieldConfig]:
        """Return the field configurations of the named resource."""
        rc = self.resources.get(name)
        return dict(rc.fields) if rc is not None else {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> GeneratorConfig:
        """Build a configuration from parsed generator YAML."""
        data = _mapping(data, "generator configuration")
        prefix_data = _mapping(data.get("prefix_config"), "prefix_config")
        defaults = PrefixConfig()
        prefix = PrefixConfig(
            spec_field=prefix_data.get("spec_field", defaults.spec_field),
            status_field=prefix_data.get("status_field", defaults.status_field),
        )
        resources = {
            str(name): _parse_resource(str(name), spec)
            for name, spec in _mapping(data.get("resources"), "resources").items()
        }
        return cls(
            prefix_config=prefix,
            include_ack_metadata=bool(data.get("include_ack_metadata", False)),
            set_many_output_not_found_err_return=str(
                data.get("set_many_output_not_found_err_return", "")
            ),
            resources=resources,
        )


def default_config() -> GeneratorConfig:
    """Return the default configuration used for generating ACK code."""
    return GeneratorConfig(
        prefix_config=PrefixConfig(spec_field=".Spec", status_field=".Status"),
        include_ack_metadata=True,
        set_many_output_not_found_err_return="return nil, ackerr.NotFound",
    )