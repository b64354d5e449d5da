"""
Task payload validators
"""

from typing import Any

from dayflow.core.models import TaskStatus
from dayflow.models.requests import CreateTaskInput, UpdateTaskInput

from .common import ValidationResult, run_model


def validate_create_task(body: Any) -> ValidationResult:
    """Validate a create-task payload.

    Omitted optional fields get their defaults (priority medium, empty tags);
    due_date, due_time, description and parent_id are only present when sent.
    """
    return run_model(CreateTaskInput, body, partial=False)


def validate_update_task(body: Any) -> ValidationResult:
    """Validate a partial task update.

    `completed` is folded into `status` (done/todo) and never passed through;
    when both are sent, `status` wins.
    """
    result = run_model(UpdateTaskInput, body, partial=True)
    if not result.ok:
        return result

    data = dict(result.data or {})
    completed = data.pop("completed", None)
    if completed is not None and "status" not in data:
        data["status"] = TaskStatus.DONE.value if completed else TaskStatus.TODO.value
    return ValidationResult.success(data)
