"""Status record models for the FaaS gateway client.

The gateway describes each deployed function with a JSON object using
camelCase keys. These models map that object onto snake_case attributes
while accepting either spelling as input. Fields the gateway adds beyond the
ones declared here are kept as extra attributes rather than dropped.

Examples:
    Decoding a listing body::

        from faas_gateway_client.models import decode_function_list

        functions = decode_function_list(
            b'[{"name": "figlet", "image": "ghcr.io/openfaas/figlet:latest",'
            b' "replicas": 1, "availableReplicas": 1}]'
        )
        functions[0].available_replicas  # 1

    Building a record directly::

        status = FunctionStatus(name="nodeinfo", namespace="openfaas-fn")
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class FunctionResources(BaseModel):
    """Memory and CPU quantities for a function's limits or requests.

    Attributes:
        memory: Memory quantity, e.g. ``"128Mi"``.
        cpu: CPU quantity, e.g. ``"100m"``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    memory: str = ""
    cpu: str = ""


class FunctionUsage(BaseModel):
    """Resource usage reported by the gateway for a function.

    Attributes:
        cpu: CPU usage, in cores.
        total_memory_bytes: Memory in use across all replicas, in bytes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    cpu: float = 0.0
    total_memory_bytes: float = 0.0


class FunctionStatus(BaseModel):
    """Current state of one function deployed on the gateway.

    Only ``name`` is required; everything else defaults to the value the
    gateway would omit. Unknown fields are preserved as extras.

    Attributes:
        name: Function name.
        image: Container image the function runs.
        namespace: Namespace the function is deployed into.
        invocation_count: Number of invocations recorded by the gateway.
        replicas: Desired replica count.
        available_replicas: Replicas ready to serve traffic.
        env_process: Process the watchdog forks for each request.
        labels: Function labels, or None when the gateway sends none.
        annotations: Function annotations, or None when the gateway sends none.
        secrets: Names of secrets mounted into the function.
        env_vars: Environment variables set on the function.
        constraints: Placement constraints.
        read_only_root_filesystem: Whether the root filesystem is read-only.
        limits: Resource limits, if any.
        requests: Resource requests, if any.
        created_at: Creation time, if reported.
        usage: Resource usage, if reported.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str = Field(..., description="Function name", examples=["figlet", "nodeinfo"])
    image: str = Field(default="", description="Container image")
    namespace: str = Field(default="", description="Deployment namespace")
    invocation_count: float = Field(default=0, ge=0, description="Recorded invocations")
    replicas: int = Field(default=0, ge=0, description="Desired replicas")
    available_replicas: int = Field(default=0, ge=0, description="Ready replicas")
    env_process: str = Field(default="", description="Watchdog process")
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    secrets: list[str] = Field(default_factory=list)
    env_vars: dict[str, str] = Field(default_factory=dict)
    constraints: list[str] = Field(default_factory=list)
    read_only_root_filesystem: bool = False
    limits: FunctionResources | None = None
    requests: FunctionResources | None = None
    created_at: datetime | None = None
    usage: FunctionUsage | None = None

    @property
    def is_ready(self) -> bool:
        """Whether at least one replica is available."""
        return self.available_replicas > 0


_function_list_adapter: TypeAdapter[list[FunctionStatus] | None] = TypeAdapter(
    list[FunctionStatus] | None
)


def decode_function_list(body: bytes) -> list[FunctionStatus]:
    """Decode a listing response body into function statuses.

    A JSON ``null`` body decodes to an empty list.

    Args:
        body: Raw response body.

    Returns:
        The function statuses in the order the gateway sent them.

    Raises:
        pydantic.ValidationError: If the body is not JSON or not a list of
            function status objects.
    """
    decoded = _function_list_adapter.validate_json(body)
    return decoded if decoded is not None else []
