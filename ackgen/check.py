"""Generated condition code that checks exception messages and required fields."""

from __future__ import annotations

from .config import GeneratorConfig
from .resource import GenerationError, OpType, Resource, Shape, camel_name, Operation

_CHECKED_OPS = (OpType.GET, OpType.GET_ATTRIBUTES, OpType.SET_ATTRIBUTES)


def check_exception_message(
    cfg: GeneratorConfig, resource: Resource, http_status_code: int
) -> str:
    """Return a Go condition matching the configured exception message prefix or suffix.

    An empty string is returned when nothing is configured for the status code.
    """
    rc = cfg.resource_config(resource.name)
    if rc is None or not rc.exceptions:
        return ""
    exc = rc.exceptions.get(http_status_code)
    if exc is None:
        return ""
    if exc.message_prefix is not None:
        return f'&& strings.HasPrefix(awsErr.Message(), "{exc.message_prefix}") '
    if exc.message_suffix is not None:
        return f'&& strings.HasSuffix(awsErr.Message(), "{exc.message_suffix}") '
    return ""


def check_required_fields_missing_from_shape(
    resource: Resource, op_type: OpType, ko_var_name: str, indent_level: int
) -> str:
    """Return Go code that reports whether any required input field of the operation is nil."""
    if op_type not in _CHECKED_OPS:
        return ""
    op = resource.operation(op_type)
    if op is None:
        raise GenerationError(
            f"resource {resource.name} has no operation for {op_type.value}"
        )
    return _check_required(resource, ko_var_name, indent_level, op, op.input)


def _check_required(
    resource: Resource,
    ko_var_name: str,
    indent_level: int,
    op: Operation,
    shape: Shape | None,
) -> str:
    indent = "\t" * indent_level
    if shape is None or not shape.required:
        return f"{indent}return false"

    prefix = resource.config.prefix_config
    missing: list[str] = []
    for member_name in shape.required:
        if resource.unpacks_attributes_map:
            # The Attributes field is set specially, per SetAttributes flavour.
            if resource.set_attributes_single_attribute:
                if member_name in ("AttributeName", "AttributeValue"):
                    continue
            elif member_name == "Attributes":
                continue
        if resource.is_primary_arn_field(member_name):
            missing.append(
                f"({ko_var_name}.Status.ACKResourceMetadata == nil || "
                f"{ko_var_name}.Status.ACKResourceMetadata.ARN == nil)"
            )
            continue
        clean_name = camel_name(member_name)
        renamed, was_renamed = resource.input_field_rename(op.name, member_name)
        if renamed in resource.spec_fields:
            attr = renamed if was_renamed else clean_name
            path = f"{ko_var_name}{prefix.spec_field}.{attr}"
        elif member_name in resource.status_fields:
            path = f"{ko_var_name}{prefix.status_field}.{clean_name}"
        else:
            raise GenerationError(
                f"GENERATION FAILURE! there's a required field {member_name} in "
                f"Shape {shape.name} that isn't in either the CR's Spec or "
                "Status structs!"
            )
        missing.append(f"{path} == nil")
    return f"{indent}return {' || '.join(missing)}\n"