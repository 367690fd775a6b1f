"""Descriptors for every resource exposed by the content admin API."""

from content_admin.application.services.resource_registry import ResourceRegistry
from content_admin.domain.entities import ResourceDescriptor

OP_LOGS = "opLogs"

CONTENT_RESOURCES: tuple[ResourceDescriptor, ...] = (
    ResourceDescriptor(
        resource_key="exercise",
        table="exercise",
        filterable_fields={
            "status": str,
            "structure_type_code": str,
            "gender_code": str,
            "difficulty_code": str,
            "equipment_code": str,
            "position_code": str,
        },
        required_fields=(
            "cover_img_url",
            "met",
            "structure_type_code",
            "gender_code",
            "difficulty_code",
            "equipment_code",
            "position_code",
        ),
    ),
    ResourceDescriptor(
        resource_key="workout",
        table="workout",
        filterable_fields={"status": str, "premium": int},
        required_fields=("premium",),
    ),
    ResourceDescriptor(
        resource_key="sound",
        table="sound",
        filterable_fields={"status": str, "gender_code": str, "usage_code": str},
        required_fields=("gender_code", "usage_code", "translation"),
    ),
    ResourceDescriptor(
        resource_key="music",
        table="music",
        extra_search_fields=("display_name",),
        filterable_fields={"status": str},
        required_fields=("audio_url", "audio_duration"),
    ),
    ResourceDescriptor(
        resource_key="playlist",
        table="playlist",
        filterable_fields={"status": str, "type": str, "premium": int},
        required_fields=("type",),
    ),
    ResourceDescriptor(
        resource_key="template",
        table="template",
        filterable_fields={"status": str, "duration_code": str},
        required_fields=("duration_code", "days"),
    ),
    ResourceDescriptor(
        resource_key="program",
        table="program",
        filterable_fields={"status": str, "show_type_code": str},
        required_fields=("cover_img_url", "show_type_code", "duration_week"),
    ),
    ResourceDescriptor(
        resource_key="category",
        table="category",
        filterable_fields={"status": str},
        paginated=False,
        fixed_sort_field="sort",
    ),
    ResourceDescriptor(
        resource_key="user",
        table="user",
        extra_search_fields=("email",),
        filterable_fields={"status": str},
        draft_required_fields=("email",),
        required_fields=("name",),
    ),
)

AUDIT_RESOURCE = ResourceDescriptor(
    resource_key=OP_LOGS,
    table="op_logs",
    search_text_field="data_info",
    extra_search_fields=("biz_type", "operation_user"),
    filterable_fields={
        "biz_type": str,
        "operation_type": str,
        "operation_user": str,
        "data_id": int,
    },
    default_order_field="operation_time",
    soft_delete_field=None,
    status_field=None,
    update_time_field=None,
    create_time_field=None,
    draft_required_fields=(),
    read_only=True,
)


def build_default_registry() -> ResourceRegistry:
    """Register every known resource and freeze the registry."""
    registry = ResourceRegistry(CONTENT_RESOURCES)
    registry.register(AUDIT_RESOURCE)
    return registry.freeze()
