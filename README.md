# ackgen

`ackgen` is a library of building blocks for generating Kubernetes service
controllers for AWS APIs. It provides:

- A generator configuration model loaded from parsed YAML
  (`ackgen.config.GeneratorConfig`, with `ackgen.config.default_config()`
  for the defaults).
- An in-memory model of a resource: its Spec and Status fields, API
  shapes and operations (`ackgen.resource.Resource`, `Field`, `Shape`,
  `Operation`, `OpType`).
- Go conditions that check whether a resource's required input fields are
  set (`ackgen.check.check_required_fields_missing_from_shape`) and whether
  an AWS error message matches the configured exception prefix or suffix
  (`ackgen.check.check_exception_message`).
- Custom hook code for resources, given inline in the generator
  configuration or rendered from a Jinja2 template file found in one of
  several base directories (`ackgen.hook.resource_hook_code`).
- A generation metadata file, `ack-generate-metadata.yaml`, that records
  SHA-1 checksums of the generated API directory and of the generator
  configuration file (`ackgen.output.create_generation_metadata`).
- Working-tree helpers (`ackgen.workspace`).

## Installation

```
pip install .
```

To run the tests, install the test extra as well:

```
pip install ".[test]"
pytest
```

## Configuration

```python
import yaml
from ackgen.config import GeneratorConfig

with open("generator.yaml") as fh:
    cfg = GeneratorConfig.from_dict(yaml.safe_load(fh))
```

`GeneratorConfig.resource_config(name)` returns the `ResourceConfig` of a
resource (or `None`), and `resource_fields(name)` its field settings.

## Required-field checks

```python
from ackgen.check import check_required_fields_missing_from_shape
from ackgen.resource import Field, Operation, OpType, Resource, Shape

string = Shape("String", "string")
request = Shape("DescribeThingInput", "structure",
                members={"Name": string}, required=["Name"])
thing = Resource(
    "Thing",
    ops={OpType.GET: Operation("DescribeThing", request)},
    spec_fields={"Name": Field("Name", string)},
)

check_required_fields_missing_from_shape(thing, OpType.GET, "r.ko", 1)
# '\treturn r.ko.Spec.Name == nil\n'
```

A required member that is neither a Spec nor a Status field raises
`ackgen.resource.GenerationError`.

## Hooks

`resource_hook_code(template_base_paths, resource, hook_id, variables,
filters)` returns an empty string when no hook is configured, the inline
`code` when one is given, and otherwise renders the hook's `template_path`.
A hook with neither, or a template that cannot be found, read, parsed or
rendered, raises `ackgen.hook.HookError`.

## Generation metadata

```python
from ackgen.output import UpdateReason, create_generation_metadata

create_generation_metadata(
    "v1alpha1", "services/sns/apis", UpdateReason.API_GENERATION,
    "v1.37.4", "generator.yaml",
)
```

This writes `ack-generate-metadata.yaml` into `services/sns/apis/v1alpha1`
and returns the `GenerationMetadata`. YAML files are left out of the
directory checksum.

## Workspace helpers

- `ensure_dir(path)` creates a directory if needed and reports whether it
  already existed; `is_dir_writeable(path)` tests writeability.
- `ensure_semver_prefix(version)` gives a version exactly one leading `v`.
- `get_sdk_version(...)` and `get_sdk_version_from_go_mod(path)` find the
  `aws-sdk-go` version to use.
- `compare_kube_aware_versions(a, b)` and `latest_api_version(output_path)`
  order Kubernetes API versions (`v1` > `v1beta2` > `v1alpha1`).
- `fall_back_find_service_id(sdk_dir, alias)` maps a service ID to its SDK
  model directory name.

## What this package does not do

There is no command-line tool. The package does not clone or check out an
SDK repository, does not load SDK API models, does not generate Go code that
compares two resources, and does not render whole API packages, controllers
or release artifacts. It supplies the pieces listed above for a program
that does.