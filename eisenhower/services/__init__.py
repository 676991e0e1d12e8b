from eisenhower.services import ordering_service, task_service


__all__ = [
    "ordering_service",
    "task_service",
]
